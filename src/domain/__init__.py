"""Общие контракты и модели пайплайна визиток."""
