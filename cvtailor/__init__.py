"""Tailor résumés to job postings by driving a CLI AI agent."""

__version__ = "0.1.0"
