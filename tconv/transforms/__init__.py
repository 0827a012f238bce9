"""
Transforms sub-package for tconv.

Contains the value transformer applied between parsing and formatting.

Design: Pipeline Pattern
- pipeline.py runs the fixed sequence of steps on one Instant:
  zone conversion, then ``add``, then ``sub``.
- ``transform()`` is the one-call form used by the line processor.
"""

from tconv.transforms.pipeline import TransformPipeline, transform

__all__ = ["TransformPipeline", "transform"]
