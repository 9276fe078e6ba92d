"""
Pydantic schemas for the Omnivore GraphQL API and its webhooks.

Wire payloads use camelCase; the models expose snake_case attributes
and accept either form on input.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

NOTE_HIGHLIGHT_TYPE = "NOTE"


def _optional_text(value: Any) -> str | None:
    """Coerce informational webhook fields to text; they never block a delivery."""
    return None if value is None else str(value)


# =============================================================================
# Labels
# =============================================================================


class Label(BaseModel):
    """An Omnivore label as seen on an article or in the workspace taxonomy."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    name: str = Field(..., description="Label name, may be namespaced as 'ns:op'")
    description: str | None = Field(None, description="Free-form label description")
    id: str | None = Field(None, description="Label UUID")
    color: str | None = Field(None, description="Label color hex code")

    @property
    def namespace(self) -> str:
        """Part before the first colon, or the whole name."""
        return self.name.split(":", 1)[0]

    def to_input(self) -> dict[str, Any]:
        """Convert to a CreateLabelInput for setLabels."""
        data: dict[str, Any] = {"name": self.name}
        if self.description:
            data["description"] = self.description
        if self.color:
            data["color"] = self.color
        return data


# =============================================================================
# Articles
# =============================================================================


class Highlight(BaseModel):
    """A highlight attached to an article. NOTE highlights are article notes."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    type: str = "HIGHLIGHT"
    short_id: str | None = Field(None, alias="shortId")
    annotation: str | None = None

    @property
    def is_note(self) -> bool:
        return self.type == NOTE_HIGHLIGHT_TYPE


class Article(BaseModel):
    """Article content and metadata fetched from Omnivore."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    id: str
    title: str = ""
    content: str = ""
    labels: list[Label] = Field(default_factory=list)
    highlights: list[Highlight] = Field(default_factory=list)

    @field_validator("title", "content", mode="before")
    @classmethod
    def _none_to_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("labels", "highlights", mode="before")
    @classmethod
    def _none_to_list(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def existing_note(self) -> Highlight | None:
        """The article's note highlight, if any (Omnivore shows at most one)."""
        return next((h for h in self.highlights if h.is_note), None)

    @property
    def label_names(self) -> list[str]:
        return [label.name for label in self.labels]

    def get_label(self, name: str) -> Label | None:
        """Find the label with this exact name on the article."""
        return next((label for label in self.labels if label.name == name), None)


# =============================================================================
# Webhooks
# =============================================================================


class WebhookLabel(BaseModel):
    """Label entry inside a webhook label payload."""

    model_config = ConfigDict(extra="ignore")

    name: str
    id: str | None = None
    color: str | None = None

    @field_validator("id", "color", mode="before")
    @classmethod
    def _coerce_text(cls, value: Any) -> str | None:
        return _optional_text(value)


class WebhookLabelPayload(BaseModel):
    """The ``label`` section of a LABEL_ADDED webhook."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    page_id: str | None = Field(None, alias="pageId")
    labels: list[WebhookLabel] = Field(default_factory=list)

    @field_validator("labels", mode="before")
    @classmethod
    def _drop_malformed_labels(cls, value: Any) -> Any:
        # Only objects carrying a name are usable, anything else is skipped
        if not isinstance(value, list):
            return []
        return [
            item
            for item in value
            if isinstance(item, dict) and isinstance(item.get("name"), str)
        ]


class WebhookPayload(BaseModel):
    """
    Omnivore webhook body.

    Only ``label.pageId`` and ``label.labels`` drive the automation; the
    page snapshot is kept as a raw value for logging.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    action: str = ""
    user_id: str | None = Field(None, alias="userId")
    label: WebhookLabelPayload | None = None
    page: Any = None

    @field_validator("action", mode="before")
    @classmethod
    def _coerce_action(cls, value: Any) -> str:
        return _optional_text(value) or ""

    @field_validator("user_id", mode="before")
    @classmethod
    def _coerce_user_id(cls, value: Any) -> str | None:
        return _optional_text(value)

    @property
    def page_id(self) -> str | None:
        return self.label.page_id if self.label else None

    @property
    def labels(self) -> list[WebhookLabel]:
        return self.label.labels if self.label else []
