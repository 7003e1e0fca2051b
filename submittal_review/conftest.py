"""Shared fixtures for submittal review tests."""

import base64
import json

import pytest

from submittal_review.review.constants import ReviewStatus
from submittal_review.review.schemas import (
    ComplianceCheck,
    CompletenessCheck,
    SubmittalRecord,
)

PDF_BYTES = b"%PDF-1.7\n1 0 obj\n<< /Type /Catalog >>\nendobj\n%%EOF\n"


@pytest.fixture
def pdf_bytes() -> bytes:
    return PDF_BYTES


@pytest.fixture
def encoded_pdf() -> str:
    return base64.b64encode(PDF_BYTES).decode("ascii")


@pytest.fixture
def submittal_payload() -> dict:
    """Provider output for a rooftop unit submittal, using wire field names."""
    return {
        "submittalNumber": "SUB-042",
        "contractNumber": "C-2291",
        "specSection": "23 74 13 - Packaged Rooftop Air-Conditioning Units",
        "description": "Packaged rooftop unit, 10 ton [Page 3]",
        "manufacturer": "Carrier 48FC",
        "requiredAttachments": "Product data, wiring diagram, warranty",
        "completeness": {
            "isComplete": True,
            "missingFiles": [],
            "missingDetails": [],
        },
        "compliance": {
            "isCompliant": False,
            "conflicts": ["[Page 15] Voltage is 208V, spec requires 480V"],
            "applicableClauses": ["2.2.A Electrical"],
        },
        "issues": ["[Page 15] Voltage is 208V, spec requires 480V"],
        "recommendedStatus": "REVISE AND RESUBMIT",
        "draftResponse": "Unit voltage does not match the specified service.",
        "nextSteps": "Resubmit with a 480V unit.",
    }


@pytest.fixture
def submittal_json(submittal_payload) -> str:
    return json.dumps(submittal_payload)


@pytest.fixture
def submittal_record() -> SubmittalRecord:
    return SubmittalRecord(
        submittal_number="SUB-042",
        contract_number="C-2291",
        spec_section="23 74 13",
        description='He said "OK"',
        manufacturer="Carrier 48FC",
        required_attachments="Product data",
        completeness=CompletenessCheck(
            is_complete=False, missing_files=["Warranty"], missing_details=[]
        ),
        compliance=ComplianceCheck(
            is_compliant=False,
            conflicts=["[Page 15] Voltage is 208V, spec requires 480V"],
            applicable_clauses=["2.2.A Electrical"],
        ),
        issues=["[Page 15] Voltage is 208V, spec requires 480V"],
        recommended_status=ReviewStatus.REVISE_AND_RESUBMIT,
        draft_response="Unit voltage does not match the specified service.",
        next_steps="Resubmit with a 480V unit.",
    )
