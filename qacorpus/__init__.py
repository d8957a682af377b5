"""Curation tool for FAQ, reverse-prompt and generic QA training documents."""
