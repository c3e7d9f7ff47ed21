# ============================================================================
# FILE: tests/unit/test_pipeline.py
# ============================================================================
"""
Tests for the lab result pipeline with a mocked chat client
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from src.medical_structuring.normalizers import DecodeStrategy
from src.medical_structuring.pipeline import LabResultPipeline
from src.utils.exceptions import ChatResponseError


@pytest.fixture
def chat_client(lab_response):
    client = MagicMock()
    client.complete = AsyncMock(return_value=lab_response)
    return client


@pytest.mark.asyncio
async def test_analyze_end_to_end(chat_client, lab_page_tokens):
    pipeline = LabResultPipeline(chat_client=chat_client)

    analysis = await pipeline.analyze([lab_page_tokens], user_summary="Yaş: 45")

    assert analysis.rows == [
        ["Kolesterol", "210 mg/dL", "<200"],
        ["Hemoglobin", "13,5 g/dL", "12-16"],
    ]

    messages = chat_client.complete.await_args.args[0]
    assert "Yaş: 45" in messages[0].content
    assert "Kolesterol\t210 mg/dL\t<200" in messages[1].content

    assert analysis.has_structured_result
    record = analysis.abnormalities[0]
    assert record.name == "Kolesterol"
    assert record.confidence == 85.0
    assert record.strategy == DecodeStrategy.PRIMARY_SCHEMA

    assert [s.title for s in analysis.sections] == [
        "", "Anormal değerler", "Önerilen ilaçlar", "Doğal çözümler"
    ]
    assert "**" not in analysis.analysis_text


@pytest.mark.asyncio
async def test_analysis_maps_to_model(chat_client, lab_page_tokens):
    pipeline = LabResultPipeline(chat_client=chat_client)

    analysis = await pipeline.analyze([lab_page_tokens])
    model = analysis.to_model("user-1")

    assert model.lab_results == {"Kolesterol": 210.0, "Hemoglobin": 13.5}
    assert model.suggested_medications == [
        "2) Önerilen ilaçlar",
        "- Statin ilaç tedavisi doktorla konuşulabilir",
    ]
    assert model.suggested_natural_solutions == ["3) Doğal çözümler", "- Doğal lif tüketimi"]
    assert model.abnormalities[0].reference_range == "<200 mg/dL"


@pytest.mark.asyncio
async def test_empty_table_still_sent():
    client = MagicMock()
    client.complete = AsyncMock(return_value="Tablo okunamadı.")
    pipeline = LabResultPipeline(chat_client=client)

    analysis = await pipeline.analyze([[]])

    assert analysis.rows == []
    assert analysis.abnormalities == []
    assert not analysis.has_structured_result
    client.complete.assert_awaited_once()


@pytest.mark.asyncio
async def test_chat_errors_propagate(lab_page_tokens):
    client = MagicMock()
    client.complete = AsyncMock(side_effect=ChatResponseError("bad gateway", status=502))
    pipeline = LabResultPipeline(chat_client=client)

    with pytest.raises(ChatResponseError):
        await pipeline.analyze([lab_page_tokens])


def test_extract_table_from_pdf_uses_recognizer(monkeypatch, token):
    recognizer = MagicMock()
    recognizer.recognize.return_value = [
        token("Glukoz", 0.0, 0.2, 0.5),
        token("95", 0.5, 0.6, 0.5),
    ]
    monkeypatch.setattr(
        "src.medical_structuring.pipeline.render_pdf_pages",
        lambda path, dpi=200: ["page-1", "page-2"],
    )
    pipeline = LabResultPipeline(chat_client=MagicMock(), recognizer=recognizer)

    rows = pipeline.extract_table_from_pdf("rapor.pdf")

    assert rows == [["Glukoz", "95"], ["Glukoz", "95"]]
    assert recognizer.recognize.call_count == 2


@pytest.mark.asyncio
async def test_numbered_analysis_without_json_has_no_records(lab_page_tokens):
    client = MagicMock()
    client.complete = AsyncMock(return_value=(
        "1) Anormal değerler\n"
        "Kolesterol biraz yüksek görünüyor.\n"
        "2) Olası nedenler\n"
        "Beslenme alışkanlıkları etkili olabilir.\n"
    ))
    pipeline = LabResultPipeline(chat_client=client)

    analysis = await pipeline.analyze([lab_page_tokens])

    assert analysis.abnormalities == []
    assert not analysis.has_structured_result
    assert [s.title for s in analysis.sections] == ["Anormal değerler", "Olası nedenler"]
