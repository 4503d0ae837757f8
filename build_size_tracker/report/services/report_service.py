"""Report service for persisting evaluation results as JSON and HTML."""

import json
import logging
import re
from collections.abc import Sequence
from pathlib import Path

from build_size_tracker.errors import ReportTemplateError, ReportWriteError
from build_size_tracker.evaluation.domain.value_objects import EvaluationResult, ReportPaths
from build_size_tracker.report.templates import DEFAULT_TEMPLATE_PATH

logger = logging.getLogger(__name__)

JSON_REPORT_NAME = "output.json"
HTML_REPORT_NAME = "report.html"

_BODY_OPEN_TAG = re.compile(r"<body\b[^>]*>", re.IGNORECASE)


class ReportService:
    """Service for turning evaluation results into report files."""

    def __init__(self, template_path: Path | None = None) -> None:
        """
        Initialize ReportService.

        Args:
            template_path: Path to a custom HTML template.
                          Defaults to the built-in template.
        """
        self._template_path = template_path or DEFAULT_TEMPLATE_PATH

    def to_json_document(self, results: Sequence[EvaluationResult]) -> bytes:
        """
        Serialise results as a pretty-printed JSON array.

        Args:
            results: Results in evaluation order

        Returns:
            UTF-8 encoded JSON document with 2-space indentation
        """
        records = [result.to_record() for result in results]
        return json.dumps(records, indent=2, ensure_ascii=False).encode("utf-8")

    def to_html_report(self, results: Sequence[EvaluationResult]) -> bytes:
        """
        Inject the results into the HTML template as COMMIT_DATA.

        Args:
            results: Results in evaluation order

        Returns:
            UTF-8 encoded HTML document

        Raises:
            ReportTemplateError: If the template cannot be read or has no <body> element
        """
        template = self._load_template()
        match = _BODY_OPEN_TAG.search(template)
        if match is None:
            raise ReportTemplateError(
                f"Report template has no <body> element: {self._template_path}"
            )

        # "</" inside the payload would otherwise end the script element early.
        payload = self.to_json_document(results).decode("utf-8").replace("</", "<\\/")
        script = f"<script>var COMMIT_DATA = {payload};</script>"
        document = template[: match.end()] + script + template[match.end() :]
        return document.encode("utf-8")

    def write_reports(
        self, output_dir: Path, results: Sequence[EvaluationResult]
    ) -> ReportPaths:
        """
        Write output.json and report.html into a directory.

        Args:
            output_dir: Directory to write into; created if missing
            results: Results in evaluation order

        Returns:
            ReportPaths of the written files

        Raises:
            ReportTemplateError: If the HTML template cannot be used
            ReportWriteError: If a file cannot be written
        """
        json_document = self.to_json_document(results)
        html_document = self.to_html_report(results)

        paths = ReportPaths(
            json_path=output_dir / JSON_REPORT_NAME,
            html_path=output_dir / HTML_REPORT_NAME,
        )
        try:
            output_dir.mkdir(parents=True, exist_ok=True)
            paths.json_path.write_bytes(json_document)
            paths.html_path.write_bytes(html_document)
        except OSError as e:
            raise ReportWriteError(f"Failed to write reports to {output_dir}: {e}") from e

        logger.info("Wrote %s and %s", paths.json_path, paths.html_path)
        return paths

    def _load_template(self) -> str:
        """Load the HTML template from file.

        Raises:
            ReportTemplateError: If the template file is missing or cannot be read.
        """
        try:
            return self._template_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            raise ReportTemplateError(
                f"Report template file not found: {self._template_path}"
            ) from None
        except OSError as e:
            raise ReportTemplateError(
                f"Failed to read report template file: {self._template_path}: {e}"
            ) from e
