from __future__ import annotations

import json
import logging
import os
import sys
from dataclasses import dataclass, field
from typing import Any, Callable, ClassVar, Literal, Optional

import jinja2
import toml
import yaml
from pydantic import BaseModel, ConfigDict

from app_config import aws
from app_config.errors import DeserializeError, InvalidSectionError, RenderError
from app_config.hooks.file import write_text

logger = logging.getLogger(__name__)

SourceType = Literal["yaml", "json", "toml"]
Lookup = Callable[[str], str]


class TemplateSettings(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")

    file: str
    source_type: SourceType
    out_file: Optional[str] = None

    def build(self) -> "TemplateHook":
        # OSError propagates: a missing template is a file error, not a config error.
        with open(os.path.expanduser(self.file), "rb") as handle:
            raw = handle.read()
        try:
            body = raw.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise InvalidSectionError("template", f"{self.file} is not valid UTF-8: {exc}") from exc
        try:
            _environment().parse(body)
        except jinja2.TemplateSyntaxError as exc:
            raise InvalidSectionError("template", f"{self.file}:{exc.lineno}: {exc.message}") from exc
        out_file = os.path.expanduser(self.out_file) if self.out_file else None
        return TemplateHook(body=body, source_type=self.source_type, out_file=out_file)


def parse_payload(source_type: SourceType, payload: str) -> Any:
    """Turn YAML, JSON or TOML text into plain dicts and lists."""
    try:
        if source_type == "yaml":
            return yaml.safe_load(payload)
        if source_type == "json":
            return json.loads(payload)
        if source_type == "toml":
            return toml.loads(payload)
    except (yaml.YAMLError, json.JSONDecodeError, toml.TomlDecodeError) as exc:
        raise DeserializeError(f"Payload is not valid {source_type}: {exc}") from exc
    raise DeserializeError(f"Unsupported source type: {source_type}")


def _environment() -> jinja2.Environment:
    return jinja2.Environment(keep_trailing_newline=True, autoescape=False)


@dataclass(frozen=True, slots=True)
class TemplateHook:
    """
    Renders structured payload data through a Jinja2 template.

    The payload is parsed according to ``source_type``. A mapping becomes the template
    context directly; any other value is available as ``data``. Templates may call
    ``key("name")`` to inline a Parameter Store value; a payload field named ``key``
    does not hide it. Output goes to ``out_file`` when set, else stdout.
    """

    name: ClassVar[str] = "template"

    body: str
    source_type: SourceType
    out_file: Optional[str] = None
    lookup: Lookup = field(default=aws.get_parameter, repr=False, compare=False)

    def render(self, payload: str) -> str:
        tree = parse_payload(self.source_type, payload)
        context = dict(tree) if isinstance(tree, dict) else {"data": tree}
        context["key"] = self.lookup
        try:
            template = _environment().from_string(self.body)
            return template.render(context)
        except Exception as exc:
            raise RenderError(f"Could not render template: {exc}") from exc

    def run(self, payload: str) -> None:
        rendered = self.render(payload)
        if self.out_file:
            write_text(self.out_file, rendered)
            logger.info("hook.template_written path=%s chars=%d", self.out_file, len(rendered))
        else:
            sys.stdout.write(rendered)
            sys.stdout.flush()
