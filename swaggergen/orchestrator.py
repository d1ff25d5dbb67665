"""Run a full generation: load, build models, build requests, emit.

The builders are pure functions of the parsed document; this module adds the
synthesized base class entries and hands the result to the emission backend.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from .class_model import ClassDefinition, ClassKind, GenerationResult, freeze
from .codegen import emit, write_files
from .config import GeneratorConfig
from .loader import load_spec
from .model_builder import build_models
from .request_builder import build_requests
from .schema_parser import SchemaDocument, parse_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationSummary:
    saved_models: int
    saved_requests: int
    files: tuple[Path, ...] = ()


def _base_entries(config: GeneratorConfig) -> tuple[dict[str, ClassDefinition], dict[str, ClassDefinition]]:
    models = {
        config.model_base: ClassDefinition(
            name=config.model_base,
            kind=ClassKind.MODEL_BASE,
            comment="Base class of every generated model.",
        ),
    }
    requests = {
        config.request_base: ClassDefinition(
            name=config.request_base,
            kind=ClassKind.REQUEST_BASE,
            comment="Base class of every generated request.",
        ),
        config.client_class: ClassDefinition(
            name=config.client_class,
            kind=ClassKind.CLIENT,
            comment="HTTP client that sends generated requests.",
        ),
    }
    return models, requests


def build_classes(document: SchemaDocument, config: GeneratorConfig) -> GenerationResult:
    """Build every model and request class for ``document``."""
    models, requests = _base_entries(config)
    models.update(build_models(document, model_base=config.model_base))
    requests.update(build_requests(
        document,
        request_base=config.request_base,
        more_specificity=config.more_specificity,
    ))

    return GenerationResult(
        namespace=config.namespace,
        models=freeze(models),
        requests=freeze(requests),
        model_base=config.model_base,
        request_base=config.request_base,
        client_class=config.client_class,
    )


def generate(config: GeneratorConfig) -> GenerationSummary:
    """Load the document at ``config.yaml_path`` and write the generated package."""
    document = parse_document(load_spec(config.yaml_path))
    result = build_classes(document, config)
    files = emit(result, config.output_dir)
    write_files(files)

    summary = GenerationSummary(
        saved_models=sum(1 for c in result.models.values() if not c.is_base),
        saved_requests=sum(1 for c in result.requests.values() if not c.is_base),
        files=tuple(sorted(files)),
    )
    logger.info(
        "generated %d models and %d requests into %s",
        summary.saved_models, summary.saved_requests, config.output_dir,
    )
    return summary
