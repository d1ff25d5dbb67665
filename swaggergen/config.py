"""Generator configuration.

One ``GeneratorConfig`` per run: where the document lives, which package the
generated code belongs to, where it goes, and the base class names injected
into the builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .class_model import CLIENT_CLASS, MODEL_BASE_CLASS, REQUEST_BASE_CLASS
from .errors import ConfigError
from .naming import drop_trailing_char


@dataclass(frozen=True)
class GeneratorConfig:
    namespace: str
    yaml_path: Path
    output_dir: Path
    more_specificity: bool = False
    model_base: str = MODEL_BASE_CLASS
    request_base: str = REQUEST_BASE_CLASS
    client_class: str = CLIENT_CLASS

    @classmethod
    def create(
        cls,
        namespace: str,
        yaml_path: Path | str,
        output_dir: Path | str,
        more_specificity: bool = False,
        **base_names: str,
    ) -> GeneratorConfig:
        """Validate and normalize options into a config."""
        namespace = drop_trailing_char(namespace.strip(), ".")
        if not namespace or not all(part.isidentifier() for part in namespace.split(".")):
            raise ConfigError(f"namespace {namespace!r} is not a dotted Python package name")

        for key, value in base_names.items():
            if key not in ("model_base", "request_base", "client_class"):
                raise ConfigError(f"unknown option {key!r}")
            if not value.isidentifier():
                raise ConfigError(f"{key} {value!r} is not a valid class name")

        return cls(
            namespace=namespace,
            yaml_path=Path(yaml_path),
            output_dir=Path(output_dir),
            more_specificity=more_specificity,
            **base_names,
        )
