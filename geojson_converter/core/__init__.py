"""Core domain model, identifier resolution, and bounding-box policy.

WHY: The core package holds what every converter agrees on: the model
dataclasses and the two small policies that decide what an identifier
is and which bounding box gets written.

HOW: model.py defines Feature, AttributesTable and Envelope,
identifier.py resolves ids from tokens, bbox.py derives the effective
bounding box.

RULES:
- Nothing here reads or writes tokens directly, except that the
  identifier resolver inspects one token's type and value
- Model types are the contract between converters; change with care
"""
