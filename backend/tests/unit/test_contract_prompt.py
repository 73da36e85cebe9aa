"""Unit tests for contract prompt construction."""

import pytest

from duna_service.application.services import build_contract_prompt, contract_name_for
from duna_service.domain.entities import DunaRecord


@pytest.mark.parametrize(
    "name, expected",
    [
        ("Alpha Co", "Alpha_Co"),
        ("Beta-DAO (US)", "Beta_DAO__US_"),
        ("already_fine", "already_fine"),
        ("3rd Wave", "Duna_3rd_Wave"),
        ("", "Duna_"),
    ],
)
def test_contract_name_for(name, expected):
    assert contract_name_for(name) == expected


def test_prompt_embeds_record_fields():
    record = DunaRecord(
        name="Alpha Co",
        description="Community treasury",
        membership_status="active",
        compliance_level=3,
    )

    prompt = build_contract_prompt(record)

    assert "Alpha Co" in prompt
    assert "`Alpha_Co`" in prompt
    assert "Community treasury" in prompt
    assert "Membership status: active" in prompt
    assert "Compliance level: 3" in prompt
    assert "Parameters\n\n(none)" in prompt


def test_prompt_is_deterministic_and_sorts_parameters():
    first = DunaRecord(
        name="Alpha Co",
        parameters={"quorum": 51, "audited": True, "limits": {"max": 10, "min": 1}},
    )
    second = DunaRecord(
        name="Alpha Co",
        parameters={"limits": {"min": 1, "max": 10}, "quorum": 51, "audited": True},
    )

    prompt = build_contract_prompt(first)

    assert prompt == build_contract_prompt(second)
    assert "- audited: true\n- limits: {max: 10, min: 1}\n- quorum: 51" in prompt
