"""Embedded license template corpus."""
from license_bom.corpus.loader import (
    TemplateCorpus,
    load_corpus,
    parse_template,
)

__all__ = [
    "TemplateCorpus",
    "load_corpus",
    "parse_template",
]
