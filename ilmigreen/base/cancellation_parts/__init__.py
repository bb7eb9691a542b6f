"""Implementation modules for :mod:`ilmigreen.base.cancellation`."""
