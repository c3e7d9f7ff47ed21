# ============================================================================
# FILE: tests/unit/test_sections.py
# ============================================================================
"""
Unit tests for analysis sections and list helpers
"""

from src.medical_structuring.normalizers.sections import (
    extract_keyword_lines,
    extract_list_items,
    parse_analysis_sections,
    strip_emphasis,
)


def test_strip_emphasis():
    assert strip_emphasis("**Kolesterol** *yüksek*") == "Kolesterol yüksek"


def test_sections_split_on_numbered_headers():
    text = (
        "Genel değerlendirme aşağıdadır.\n"
        "1) Anormal değerler\n"
        "- Kolesterol yüksek\n"
        "\n"
        "2. Öneriler\n"
        "- Doktorunuza danışın\n"
        "- Lifli beslenin\n"
    )

    sections = parse_analysis_sections(text)

    assert [s.title for s in sections] == ["", "Anormal değerler", "Öneriler"]
    assert sections[0].lines == ["Genel değerlendirme aşağıdadır."]
    assert sections[2].lines == ["- Doktorunuza danışın", "- Lifli beslenin"]


def test_sections_empty_text():
    assert parse_analysis_sections("") == []


def test_header_without_body_kept():
    sections = parse_analysis_sections("1) Sonuç")

    assert len(sections) == 1
    assert sections[0].title == "Sonuç"
    assert sections[0].lines == []


def test_list_items_strip_markers_only():
    text = "Öneriler:\n- Zencefil çayı\n• Bal\n2) 500 ml su için\n"

    assert extract_list_items(text) == ["Zencefil çayı", "Bal", "500 ml su için"]


def test_list_items_fall_back_to_text():
    assert extract_list_items("  Bol dinlenin.  ") == ["Bol dinlenin."]
    assert extract_list_items("   ") == []


def test_keyword_lines_case_insensitive():
    text = "Önerilen İLAÇ tedavisi\nDoğal çözümler: nane\nEgzersiz yapın\nNatural remedies"

    assert extract_keyword_lines(text, ("egzersiz",)) == ["Egzersiz yapın"]
    assert extract_keyword_lines(text, ("doğal", "natural")) == ["Doğal çözümler: nane", "Natural remedies"]
