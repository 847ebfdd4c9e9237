"""Sentence sequence strategies, one per document type."""

from .plain import PlainTextSegmenter, split_tag
from .xml import RegionCoordinator

__all__ = ['PlainTextSegmenter', 'RegionCoordinator', 'split_tag']
