"""License template corpus loading.

Template documents carry a front matter block of ``key: value`` lines
between two ``---`` lines, followed by the license body.
"""
from __future__ import annotations

import logging
from collections.abc import Iterable, Iterator
from importlib import resources
from typing import Optional

from license_bom.analysis.normalize import make_word_set
from license_bom.exceptions import CorpusError
from license_bom.models.template import LicenseTemplate

logger = logging.getLogger(__name__)

FRONT_MATTER_DELIMITER = "---"

# Front matter key -> LicenseTemplate field
FRONT_MATTER_KEYS = {
    "title": "title",
    "nickname": "nickname",
    "spdx-id": "spdx_id",
}

DATA_PACKAGE = "license_bom.corpus"
DATA_DIR = "data"


def parse_template(content: str, source: str = "<template>") -> LicenseTemplate:
    """Parse a template document.

    Args:
        content: Document text.
        source: Name used in error messages.

    Returns:
        LicenseTemplate with front matter fields and body word set. Missing
        front matter keys leave empty strings.

    Raises:
        CorpusError: If the front matter block is not opened and closed.
    """
    fields: dict[str, str] = {}
    body: list[str] = []
    # 0: before front matter, 1: inside it, 2: body
    state = 0

    for raw_line in content.splitlines():
        line = raw_line.strip()
        if state == 0:
            if line == FRONT_MATTER_DELIMITER:
                state = 1
        elif state == 1:
            if line == FRONT_MATTER_DELIMITER:
                state = 2
                continue
            key, sep, value = line.partition(":")
            if sep and key in FRONT_MATTER_KEYS:
                fields[FRONT_MATTER_KEYS[key]] = value.strip()
        else:
            body.append(raw_line + "\n")

    if state != 2:
        raise CorpusError(f"Cannot scan template {source}: unterminated front matter")

    text = "".join(body)
    return LicenseTemplate(text=text, words=make_word_set(text), **fields)


class TemplateCorpus:
    """An ordered, immutable collection of license templates.

    The order is the tie-break order of the matcher, so it must stay
    stable between runs.
    """

    def __init__(self, templates: Iterable[LicenseTemplate]) -> None:
        self._templates = tuple(templates)

    @classmethod
    def from_documents(cls, documents: Iterable[str]) -> TemplateCorpus:
        """Build a corpus from raw template documents.

        Raises:
            CorpusError: If any document cannot be parsed.
        """
        return cls(
            parse_template(doc, source=f"#{index}")
            for index, doc in enumerate(documents)
        )

    def __iter__(self) -> Iterator[LicenseTemplate]:
        return iter(self._templates)

    def __len__(self) -> int:
        return len(self._templates)

    @property
    def templates(self) -> tuple[LicenseTemplate, ...]:
        return self._templates

    def find(self, name: str) -> Optional[LicenseTemplate]:
        """Look up a template by title or SPDX identifier (case-insensitive)."""
        wanted = name.lower()
        for template in self._templates:
            if template.title.lower() == wanted or template.spdx_id.lower() == wanted:
                return template
        return None


def load_corpus() -> TemplateCorpus:
    """Load the template corpus embedded in the package.

    Documents are read in file name order.

    Returns:
        TemplateCorpus of the embedded templates.

    Raises:
        CorpusError: If a document cannot be read or parsed. The corpus is
            part of the package, so this indicates a packaging defect.
    """
    data_dir = resources.files(DATA_PACKAGE).joinpath(DATA_DIR)
    entries = sorted(
        (entry for entry in data_dir.iterdir() if entry.name.endswith(".txt")),
        key=lambda entry: entry.name,
    )

    templates: list[LicenseTemplate] = []
    for entry in entries:
        try:
            content = entry.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise CorpusError(f"Cannot read template {entry.name}: {e}") from e
        templates.append(parse_template(content, source=entry.name))

    logger.debug("Loaded %d license templates", len(templates))
    return TemplateCorpus(templates)
