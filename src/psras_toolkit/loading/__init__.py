"""
Module: loading

Purpose:
    Question-bank snapshot loading from JSON / JSONL files.

Key Functions:
    - load_question_bank(): Load every question under a file or directory
    - write_questions_jsonl(): Write a snapshot back as JSONL

Used By:
    - cli: all subcommands
"""

from .loader import LoaderError, load_question_bank, read_question_file, write_questions_jsonl

__all__ = [
    "LoaderError",
    "load_question_bank",
    "read_question_file",
    "write_questions_jsonl",
]
