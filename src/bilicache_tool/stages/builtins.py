"""Built-in processing stages."""

from __future__ import annotations

import logging

from pydantic import ValidationError

from bilicache_tool.application.options import RunOptions
from bilicache_tool.application.results import FileContext
from bilicache_tool.errors import StageError
from bilicache_tool.schemas import EntryDocument

logger = logging.getLogger(__name__)


class NonEmptyContentStage:
    """Accept any entry file whose decoded content is not blank.

    Notes
    -----
    This is the default stage. It performs no decoding of the cache layout
    and writes nothing under ``output_root``.
    """

    name = "non_empty"

    def process(self, context: FileContext, options: RunOptions) -> None:
        """Raise ``StageError`` when the content is empty or whitespace only."""
        del options
        if not context.text.strip():
            raise StageError(f"{context.relative_path} is empty.")
        logger.debug(
            "%s: %d characters", context.relative_path, len(context.text)
        )


class JsonDocumentStage:
    """Require the entry file to hold a JSON object."""

    name = "json_document"

    def process(self, context: FileContext, options: RunOptions) -> None:
        """Validate the decoded text as a JSON object.

        Parameters
        ----------
        context : FileContext
            Snapshot of the entry file.
        options : RunOptions
            Current run options.

        Raises
        ------
        StageError
            If the content is not valid JSON or the top level is not an object.
        """
        del options
        try:
            document = EntryDocument.validate_json(context.text)
        except ValidationError as exc:
            first = exc.errors(include_url=False)[0]
            raise StageError(
                f"{context.relative_path} is not a JSON object: {first['msg']}"
            ) from exc
        logger.debug("%s: %d top-level keys", context.relative_path, len(document))


BUILTIN_STAGES = (NonEmptyContentStage, JsonDocumentStage)
