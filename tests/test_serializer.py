import json
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from ipaddress import IPv4Address
from typing import Any, Optional

import pytest

from converters.payload import JsonPayloadConverter
from models.endpoint import Endpoint
from serialization.serializer import JsonSerializer, payload_converters


class Difficulty(Enum):
    EASY = "easy"
    HARD = "hard"


@dataclass
class Audio:
    volume: int = 5
    muted: bool = False


@dataclass
class Settings:
    player_name: str = "player"
    difficulty: Difficulty = Difficulty.EASY
    audio: Audio = field(default_factory=Audio)
    recent: list[str] = field(default_factory=list)
    scores: dict[str, int] = field(default_factory=dict)
    last_played: Optional[datetime] = None
    ratio: float = 1.0
    servers: list[IPv4Address] = field(default_factory=list)
    extra: dict[str, Any] = field(default_factory=dict)


def test_dataclass_round_trip():
    serializer = JsonSerializer()
    settings = Settings(
        player_name="ana",
        difficulty=Difficulty.HARD,
        audio=Audio(volume=9, muted=True),
        recent=["a", "b"],
        scores={"level1": 100},
        last_played=datetime(2024, 6, 1, 8, 30),
        ratio=0.25,
        servers=[IPv4Address("10.0.0.1")],
        extra={"k": [1, 2]},
    )
    text = serializer.to_text(settings)
    payload = json.loads(text)
    assert payload["difficulty"] == "hard"
    assert payload["last_played"] == "2024-06-01T08:30:00"
    assert payload["servers"] == ["10.0.0.1"]
    assert serializer.from_text(text, Settings) == settings


def test_unknown_keys_ignored_and_missing_keys_default():
    serializer = JsonSerializer()
    result = serializer.from_text('{"player_name": "bo", "unknown": {"deep": [1]}, "ratio": 2}', Settings)
    assert result.player_name == "bo"
    assert result.ratio == 2.0
    assert isinstance(result.ratio, float)
    assert result.audio == Audio()


def test_untyped_read_returns_builtin_tree():
    assert JsonSerializer().from_text('{"a": [1, null], "b": null}') == {"a": [1, None], "b": None}


def test_null_for_dataclass_reads_as_none():
    assert JsonSerializer().from_text("null", Settings) is None


def test_object_expected_for_dataclass():
    with pytest.raises(ValueError):
        JsonSerializer().from_text("[1, 2]", Settings)


def test_naming_convention_applies_to_dataclass_fields():
    serializer = JsonSerializer(naming_convention="camel_case")
    value = serializer.to_value(Audio(volume=3))
    assert value == {"volume": 3, "muted": False}
    tree = serializer.to_value(Settings())
    assert "playerName" in tree and "lastPlayed" in tree
    assert serializer.from_value({"playerName": "cy"}, Settings).player_name == "cy"


def test_endpoint_list_and_dict_values():
    serializer = JsonSerializer()
    value = {"eps": [Endpoint(IPv4Address("1.2.3.4"), 80), Endpoint()]}
    assert serializer.to_value(value) == {"eps": ["1.2.3.4:80", None]}
    assert serializer.from_value(["1.2.3.4:80"], list[Endpoint]) == [Endpoint(IPv4Address("1.2.3.4"), 80)]


def test_default_serializer_keeps_nulls_in_dicts():
    assert JsonSerializer().to_text({"a": None, "b": 1}, indent=None) == '{"a": null, "b": 1}'


def test_payload_converter_takes_untyped_dicts():
    serializer = JsonSerializer(payload_converters())
    assert isinstance(serializer.find_converter(dict), JsonPayloadConverter)
    assert serializer.to_text({"a": [1, None], "b": 1}, indent=None) == '{"a": [1], "b": 1}'
    assert serializer.from_text('{"a": [1, null, 2]}', dict) == {"a": [1, 2]}


def test_top_level_none_writes_null():
    assert JsonSerializer().to_text(None) == "null"
