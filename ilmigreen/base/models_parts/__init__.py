"""Model implementation modules; import from :mod:`ilmigreen.base.models`."""
