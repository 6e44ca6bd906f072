"""Tests for skill definition validation."""

import pytest
from pydantic import ValidationError

from interaction_engine.schemas.io import IOData
from interaction_engine.schemas.skill import BindingKind, Intent, ParameterClass, Skill, SkillParameter


def test_keywords_are_lowercased():
    intent = Intent(actions={"Turn On"}, targets=["LIGHT"])
    assert intent.actions == {"turn on"}
    assert intent.targets == {"light"}


def test_blank_keyword_rejected():
    with pytest.raises(ValidationError):
        Intent(actions={"  "})


def test_locations_keep_order_and_are_lowercased():
    skill = Skill(id="x", name="X", binding=BindingKind.local, locations=["Kitchen", "Lounge"])
    assert skill.locations == ["kitchen", "lounge"]


def test_parameter_accepts_class_alias():
    param = SkillParameter.model_validate({"name": "Sugar", "class": "quantity"})
    assert param.name == "sugar"
    assert param.cls == ParameterClass.quantity
    assert param.required is True
    assert param.model_dump(by_alias=True) == {"name": "sugar", "class": "quantity", "required": True}


def test_unknown_parameter_class_rejected():
    with pytest.raises(ValidationError):
        SkillParameter.model_validate({"name": "x", "class": "colour"})


def test_duplicate_parameter_names_rejected():
    with pytest.raises(ValidationError, match="duplicate parameter names"):
        Skill(
            id="x",
            name="X",
            binding=BindingKind.local,
            parameters=[
                SkillParameter(name="sugar", cls=ParameterClass.quantity),
                SkillParameter(name="sugar", cls=ParameterClass.integer_value),
            ],
        )


def test_network_skill_requires_endpoint():
    with pytest.raises(ValidationError, match="endpoint"):
        Skill(id="x", name="X", binding=BindingKind.network)


@pytest.mark.parametrize(
    "mime, is_text",
    [
        ("text/plain", True),
        ("Text/Plain; charset=utf-8", True),
        ("application/json", False),
        ("audio/wav", False),
    ],
)
def test_iodata_text_detection(mime, is_text):
    assert IOData(mime=mime, data="hi").is_text is is_text
