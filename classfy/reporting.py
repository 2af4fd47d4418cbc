import csv
import logging
from pathlib import Path
from typing import List

from .models import Category, RunSummary

SEPARATOR = "-" * 78

CATEGORY_LABELS = {
    Category.IMAGES: "Images",
    Category.DOCUMENTS: "Documents",
    Category.MUSIC: "Music",
    Category.VIDEOS: "Videos",
    Category.ARCHIVES: "Archives",
    Category.OTHERS: "Others",
}


class ReportGenerator:
    def __init__(self, summary: RunSummary):
        self.summary = summary

    def render(self) -> str:
        """Console report: sorted duplicates, errors, totals and per-category counts."""
        lines: List[str] = ["", "Duplicate files detected and skipped:"]
        if self.summary.duplicates:
            lines.append(SEPARATOR)
            lines.extend(str(p) for p in sorted(self.summary.duplicates, key=str))
            lines.append(SEPARATOR)
            lines.append(f"Total duplicate files skipped: {self.summary.total_duplicates}")
        else:
            lines.append("None")

        if self.summary.errors:
            lines.append("")
            lines.append("Files skipped due to errors:")
            lines.append(SEPARATOR)
            for placement in sorted(self.summary.errors, key=lambda p: str(p.source)):
                lines.append(f"{placement.source}: {placement.notes}")
            lines.append(SEPARATOR)
            lines.append(f"Total files with errors: {len(self.summary.errors)}")

        lines.append("")
        lines.append("File organization complete!")
        lines.append(f"Total files placed: {self.summary.total_placed}")
        lines.append("Files organized into the following categories:")
        for category in Category:
            lines.append(f"- {CATEGORY_LABELS[category]}: {self.summary.placed[category]}")
        return "\n".join(lines)

    def write_csv(self, output_csv: Path):
        """One row per discovered file, in discovery order."""
        headers = [
            "Source Path",
            "Status",
            "Category",
            "Destination Path",
            "Notes",
        ]

        with open(output_csv, "w", newline="", encoding="utf-8") as f:
            writer = csv.writer(f)
            writer.writerow(headers)
            for placement in self.summary.placements:
                writer.writerow([
                    str(placement.source),
                    placement.status.value,
                    placement.category.value if placement.category else "",
                    str(placement.destination) if placement.destination else "",
                    placement.notes,
                ])

        logging.info(f"Report written: {output_csv} ({len(self.summary.placements)} rows)")
