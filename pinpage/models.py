from typing import Any, List, Literal, Optional, Union, get_args

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    PositiveInt,
    StrictFloat,
    StrictInt,
    StrictStr,
    model_validator,
)
from pydantic.alias_generators import to_camel

ContentKind = Literal[
    "heading",
    "text",
    "paragraph",
    "html",
    "image",
    "button",
    "divider",
    "emoji",
    "gallery",
]
ActionType = Literal["none", "link", "alert", "confetti", "spookyEmojis", "singleEmoji"]
TextAlign = Literal["left", "center", "right"]
Tone = Literal["professional", "casual", "creative", "minimal"]
ThemePreference = Literal["light", "dark", "auto"]

CONTENT_KINDS: tuple[str, ...] = get_args(ContentKind)
ACTION_TYPES: tuple[str, ...] = get_args(ActionType)
TONES: tuple[str, ...] = get_args(Tone)
THEME_PREFERENCES: tuple[str, ...] = get_args(ThemePreference)

GALLERY_STYLE_KEYS = frozenset({"galleryColumns", "galleryGap"})

CssValue = Any


class BlockStyle(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    text_align: Optional[TextAlign] = None
    font_size: Optional[str] = None
    color: Optional[str] = None
    background_color: Optional[str] = None
    padding: Optional[CssValue] = None
    margin: Optional[CssValue] = None
    width: Optional[CssValue] = None
    height: Optional[CssValue] = None
    border_radius: Optional[CssValue] = None
    gallery_columns: Optional[Union[int, float]] = None
    gallery_gap: Optional[CssValue] = None


class ButtonAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: ActionType
    value: Any | None = None
    emoji: Any | None = None


class ContentBlock(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True)

    id: str = Field(..., min_length=1)
    kind: ContentKind = Field(..., alias="type")
    content: str
    style: BlockStyle = Field(default_factory=BlockStyle)
    action: Optional[ButtonAction] = None
    images: Optional[List[str]] = None

    @model_validator(mode="after")
    def validate_gallery_style(self) -> "ContentBlock":
        if self.kind == "gallery":
            return self
        if self.style.gallery_columns is not None or self.style.gallery_gap is not None:
            raise ValueError(f"gallery style fields are not allowed on kind '{self.kind}'")
        return self

    def to_json_dict(self) -> dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_none=True)


class GenerationConfig(BaseModel):
    model_config = ConfigDict(extra="forbid", frozen=True)

    tone: Tone = "professional"
    preferred_kinds: List[ContentKind] = Field(default_factory=list)
    theme_preference: ThemePreference = "auto"
    max_components: Optional[PositiveInt] = None
    include_images: Optional[bool] = None
    include_buttons: Optional[bool] = None


def _reject_explicit_nulls(data: Any, keys: tuple[str, ...]) -> Any:
    if isinstance(data, dict):
        for key in keys:
            if key in data and data[key] is None:
                raise ValueError(f"'{key}' must not be null")
    return data


class RawStyle(BaseModel):
    """Checked subset of an untrusted style object; unknown keys pass."""

    model_config = ConfigDict(extra="ignore")

    textAlign: Optional[TextAlign] = None
    fontSize: Optional[StrictStr] = None
    color: Optional[StrictStr] = None
    backgroundColor: Optional[StrictStr] = None
    galleryColumns: Optional[Union[StrictInt, StrictFloat]] = None

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        return _reject_explicit_nulls(
            data, ("textAlign", "fontSize", "color", "backgroundColor", "galleryColumns")
        )


class RawAction(BaseModel):
    model_config = ConfigDict(extra="allow")

    type: ActionType


class RawComponent(BaseModel):
    """Structural schema for one element of a model response's components array."""

    model_config = ConfigDict(extra="ignore")

    type: ContentKind
    content: StrictStr
    style: Optional[RawStyle] = None
    action: Optional[RawAction] = None
    images: Optional[List[StrictStr]] = None

    @model_validator(mode="before")
    @classmethod
    def reject_nulls(cls, data: Any) -> Any:
        return _reject_explicit_nulls(data, ("style", "action", "images"))
