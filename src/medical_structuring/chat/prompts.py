# src/medical_structuring/chat/prompts.py
"""
Prompt assembly for the AI features.

System content = persona + user health summary + output-format instructions.
The lab prompt embeds the reconstructed table as tab-separated text.
"""

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from ..extractors.table_reconstructor import ExtractedTable, to_tabular_text
from .messages import ChatMessage


@dataclass
class PromptTemplate:
    """Per-feature prompt texts."""
    persona: str
    format_instructions: str
    user_template: str = "{content}"
    default_user_prompt: str = ""

    def system_content(self, user_summary: str) -> str:
        parts = [self.persona, user_summary, self.format_instructions]
        return "\n\n".join(p for p in parts if p and p.strip())


LAB_RESULT_TEMPLATE = PromptTemplate(
    persona=(
        "You are a careful medical assistant who explains laboratory results "
        "in plain language. You never diagnose; you point out values outside "
        "their reference ranges and suggest when to see a doctor."
    ),
    format_instructions=(
        "Answer in numbered sections: 1) Abnormal values 2) Possible causes "
        "3) Suggested medications to discuss with a doctor 4) Natural solutions. "
        "Before the sections, return a JSON array of abnormal tests with the keys "
        "\"test\", \"confidence\" (0-100), \"description\", \"reference_range\" and \"recommendation\"."
    ),
    user_template="Here are my lab results (columns separated by tabs):\n{content}",
)

DEPARTMENT_TEMPLATE = PromptTemplate(
    persona="You are a triage assistant who suggests which hospital department to visit.",
    format_instructions=(
        "Return only a JSON array like "
        "[{\"department\": \"Cardiology\", \"confidence\": 72}] with confidence 0-100."
    ),
    default_user_prompt="Which department should I visit?",
)

DISEASE_TEMPLATE = PromptTemplate(
    persona="You are a medical assistant who lists possible conditions for the given symptoms.",
    format_instructions=(
        "Return only a JSON array like "
        "[{\"disease\": \"Migraine\", \"confidence\": 72, \"description\": \"...\"}] "
        "with confidence 0-100."
    ),
    default_user_prompt="What could be causing my symptoms?",
)


@dataclass
class SymptomInput:
    """User input of the symptom-driven features."""
    selected_symptoms: List[str] = field(default_factory=list)
    other_symptoms: str = ""
    include_other: bool = False
    feelings: str = ""
    duration: str = ""

    def symptom_list(self) -> List[str]:
        symptoms = list(self.selected_symptoms)
        if self.include_other and self.other_symptoms.strip():
            symptoms.append(self.other_symptoms.strip())
        return symptoms


def build_lab_prompt(
    user_summary: str,
    rows: ExtractedTable,
    template: PromptTemplate = LAB_RESULT_TEMPLATE
) -> List[ChatMessage]:
    """System + user messages carrying the reconstructed lab table."""
    return [
        ChatMessage(role="system", content=template.system_content(user_summary)),
        ChatMessage(role="user", content=template.user_template.format(content=to_tabular_text(rows))),
    ]


def build_symptom_prompt(
    user_summary: str,
    symptoms: SymptomInput,
    template: PromptTemplate
) -> List[ChatMessage]:
    """System + user messages for department / disease features."""
    user_parts: List[str] = []
    if symptoms.selected_symptoms:
        user_parts.append("Symptoms: " + ", ".join(symptoms.selected_symptoms))
    if symptoms.include_other and symptoms.other_symptoms.strip():
        user_parts.append("Other symptoms: " + symptoms.other_symptoms.strip())
    if symptoms.feelings.strip():
        user_parts.append("How I feel: " + symptoms.feelings.strip())
    if symptoms.duration.strip():
        user_parts.append("Duration: " + symptoms.duration.strip())

    user_content = "\n".join(user_parts) or template.default_user_prompt

    return [
        ChatMessage(role="system", content=template.system_content(user_summary)),
        ChatMessage(role="user", content=user_content),
    ]


def join_messages(messages: Iterable[ChatMessage], separator: str = "\n\n") -> str:
    """Flatten messages for logging or caching keys."""
    return separator.join(f"[{m.role}] {m.content}" for m in messages)
