# SPDX-License-Identifier: MIT

# resources/sequence_resource.py
"""
Read-only sequence resource: oeis://sequence/{id}

The template is advertised and rendered as application/json; the body is
the indented JSON of the parsed ``Sequence``. URI matching goes through
``template_to_regex``, which the registry uses to route resource reads.
"""

import logging
import re
from functools import lru_cache

from ..errors import translate_errors
from ..services.lookup import fetch_sequence
from ..services.oeis_client import SequenceFetcher
from ..services.rendering import render_json

logger = logging.getLogger(__name__)

URI_TEMPLATE = "oeis://sequence/{id}"
MIME_TYPE = "application/json"


@lru_cache(maxsize=None)
def template_to_regex(uri_template: str) -> "re.Pattern[str]":
    """Compile ``scheme://path/{var}`` into a regex with one group per variable."""
    parts = re.split(r"\{(\w+)\}", uri_template)
    pattern = ""
    for index, part in enumerate(parts):
        # odd indices are variable names, even ones literal text
        pattern += f"(?P<{part}>[^/]+)" if index % 2 else re.escape(part)
    return re.compile(f"^{pattern}$")


class SequenceResourceResolver:
    """Reads sequence resources for the ``{id}`` extracted from the URI."""

    uri_template = URI_TEMPLATE
    mime_type = MIME_TYPE

    def __init__(self, fetcher: SequenceFetcher):
        self.fetcher = fetcher

    async def read(self, id: str) -> str:
        """OEIS sequence data by ID (e.g., A000045)"""
        logger.info(f"Reading resource: {self.uri_template.format(id=id)}")
        with translate_errors("read_sequence"):
            sequence = await fetch_sequence(self.fetcher, id)
        return render_json(sequence)
