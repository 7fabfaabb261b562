"""Exporter layer."""

from deadwood.exporter.report_writer import build_report_document, load_report, write_report

__all__ = ["build_report_document", "load_report", "write_report"]
