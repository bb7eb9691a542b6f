from __future__ import annotations

import pytest
from pydantic import ValidationError

from ilmigreen.base.dto import ChatExchangeDTO, DetectionRequestDTO, DetectionResultDTO, MessageDTO
from ilmigreen.base.models import Message, WasteType


def test_chat_exchange_body_from_transcript():
    dto = ChatExchangeDTO.from_transcript((Message("assistant", "Halo!"), Message("user", "Hai")))
    assert dto.to_body() == {  # nosec B101
        "messages": [{"role": "assistant", "content": "Halo!"}, {"role": "user", "content": "Hai"}]
    }


@pytest.mark.parametrize(
    "messages",
    [
        [],
        [{"role": "assistant", "content": "Halo!"}],
        [{"role": "system", "content": "x"}],
        [{"role": "user", "content": "  "}],
    ],
)
def test_chat_exchange_rejects_invalid(messages):
    with pytest.raises(ValidationError):
        ChatExchangeDTO(messages=messages)


def test_message_dto_keeps_content_verbatim():
    assert MessageDTO(role="user", content=" spasi ").content == " spasi "  # nosec B101


def test_detection_request_strips_input():
    dto = DetectionRequestDTO(input="  kaleng  ", type="text")
    assert dto.to_body() == {"input": "kaleng", "type": "text"}  # nosec B101


def test_detection_request_rejects_bad_type():
    with pytest.raises(ValidationError):
        DetectionRequestDTO(input="x", type="video")


def test_detection_result_to_domain():
    dto = DetectionResultDTO.model_validate({"jenis": "Anorganik", "penjelasan": "p", "tips": "t"})
    result = dto.to_domain()
    assert result.waste_type is WasteType.ANORGANIK  # nosec B101
    assert result.explanation == "p"  # nosec B101


def test_whitespace_only_assistant_reply_is_accepted():
    transcript = (Message("user", "halo"), Message("assistant", "\n"), Message("user", "lagi"))
    body = ChatExchangeDTO.from_transcript(transcript).to_body()
    assert body["messages"][1] == {"role": "assistant", "content": "\n"}  # nosec B101


def test_blank_user_message_is_rejected():
    with pytest.raises(ValidationError):
        MessageDTO(role="user", content=" \n ")
