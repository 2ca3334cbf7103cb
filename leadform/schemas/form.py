# leadform/schemas/form.py
from __future__ import annotations

from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageContextIn(_CamelModel):
    url: Optional[str] = Field(default=None, max_length=4096)
    referrer: Optional[str] = Field(default=None, max_length=4096)
    title: str = Field(default="", max_length=512)
    user_agent: Optional[str] = Field(default=None, max_length=1024)
    language: Optional[str] = Field(default=None, max_length=64)
    screen_width: Optional[int] = Field(default=None, ge=0)
    screen_height: Optional[int] = Field(default=None, ge=0)
    viewport_width: Optional[int] = Field(default=None, ge=0)
    viewport_height: Optional[int] = Field(default=None, ge=0)


class FormSubmitRequest(_CamelModel):
    # Raw control values; rules are applied by the validators, not here
    name: str = Field(default="", max_length=200)
    email: str = Field(default="", max_length=320)
    phone: str = Field(default="", max_length=64)
    accepted_policy: bool = False

    page: PageContextIn = Field(default_factory=PageContextIn)


class FormSubmitResponse(_CamelModel):
    status: str
    redirect: str


class FieldValueIn(BaseModel):
    value: Union[str, bool] = ""


class FieldValidationOut(BaseModel):
    field: str
    valid: bool
    message: str


class PhoneMaskOut(_CamelModel):
    value: str
    digits: str
    cursor: int
    blocks_backspace: bool
