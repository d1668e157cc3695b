"""
Copyright (c) 2025 initumX (initum.x@gmail.com)
Licensed under the MIT License

core/reporter.py
Counts and sizes per classification, formatted for the console.
"""
from dataclasses import dataclass
from typing import List

from dupesniff.core.models import ClassifiedPair, Classification
from dupesniff.utils.convert_utils import ConvertUtils

RULE = "-------------------"


@dataclass
class ClassSummary:
    count: int
    total_bytes: int


class Reporter:
    """
    Builds the summary and detail blocks of a scan report.
    Sizes are taken from the second file of each pair only.
    """

    @staticmethod
    def summarize(pairs: List[ClassifiedPair]) -> ClassSummary:
        total_bytes = sum(pair.second.resolve_size() for pair in pairs)
        return ClassSummary(count=len(pairs), total_bytes=total_bytes)

    @staticmethod
    def header(title: str) -> str:
        return f"{RULE} {title} {RULE}"

    @staticmethod
    def format_summary(classification: Classification, summary: ClassSummary) -> str:
        label = classification.header
        if summary.count == 0:
            return f"No {label} files were found."
        gigabytes = ConvertUtils.bytes_to_gigabytes(summary.total_bytes)
        return "\n".join([
            Reporter.header(f"{label} SUMMARY"),
            f"Found {summary.count} files in {label} list adding up to {gigabytes} GB.",
        ])

    @staticmethod
    def format_details(classification: Classification, pairs: List[ClassifiedPair]) -> str:
        lines = [Reporter.header(f"{classification.header} DETAILS")]
        for pair in pairs:
            if pair.is_single:
                size_str = ConvertUtils.bytes_to_human(pair.first.resolve_size())
                lines.append(f"  [{pair.first.path}] ({size_str})")
            else:
                lines.append(f"  [{pair.first.path}] --> [{pair.second.path}]")
        return "\n".join(lines)

    @staticmethod
    def report(classification: Classification, pairs: List[ClassifiedPair], show_details: bool) -> str:
        """Detail block (when requested and non-empty) followed by the summary."""
        blocks = []
        if show_details and pairs:
            blocks.append(Reporter.format_details(classification, pairs))
        blocks.append(Reporter.format_summary(classification, Reporter.summarize(pairs)))
        return "\n".join(blocks)
