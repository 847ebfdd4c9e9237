"""Sentence segmentation restricted to the text inside XML elements."""

import io
from typing import List, Optional, TextIO

from ..config.schema import PreprocessorConfig
from ..core.abc import Logger, Meter, RegionSource
from ..core.errors import ExhaustedError, InvalidArgument, StreamReadError
from ..core.types import Token
from ..regions import XMLRegionSource
from .plain import PlainTextSegmenter, release_stream


class RegionCoordinator:
    """
    Segments each matching XML region separately and chains the results.

    The coordinator owns the document stream. Each region's text is handed
    to a new PlainTextSegmenter as its own stream, built with the same
    configuration. Regions that produce no sentences (e.g. ``<s></s>``)
    are skipped without ending the sequence.
    """

    def __init__(self, stream: TextIO, config: Optional[PreprocessorConfig] = None, *,
                 logger: Optional[Logger] = None, meter: Optional[Meter] = None,
                 regions: Optional[RegionSource] = None):
        """
        Initialize coordinator over a document stream.

        Args:
            stream: Document stream; closed once all regions are read
            config: Segmentation options shared by every region
            logger: Optional structured logger
            meter: Optional metrics collector
            regions: Region source to use instead of an XMLRegionSource over stream
        """
        if stream is None:
            raise InvalidArgument("Cannot read from null object!")
        self.config = config or PreprocessorConfig()
        self.log = logger
        self.meter = meter
        self._stream: Optional[TextIO] = stream
        self._regions = regions if regions is not None else XMLRegionSource(
            stream, self.config.element_filter, keep_internal_tags=self.config.keep_internal_tags)
        self._current: Optional[PlainTextSegmenter] = None
        self._next_sentence: Optional[List[Token]] = None
        self._region_count = 0
        self._done = False

    def _release(self):
        if self._stream is None:
            return
        release_stream(self._stream)
        self._stream = None
        if self.log:
            self.log.info("stream_released", regions=self._region_count)

    def _prime(self):
        # Loop because a region like <s></s> gives a segmenter with no sentences
        while self._next_sentence is None and not self._done:
            if self._current is not None and self._current.has_next():
                self._next_sentence = next(self._current)
                return
            try:
                has_region = self._regions.has_next()
            except StreamReadError as e:
                if self.log:
                    self.log.error("Read failed", error=str(e), regions=self._region_count)
                self._done = True
                self._release()
                raise
            if not has_region:
                self._done = True
                self._current = None
                self._release()
                return
            block = next(self._regions)
            self._region_count += 1
            if self.meter:
                self.meter.inc("docsegment.regions")
            if self.log:
                self.log.info("region_opened", index=self._region_count, length=len(block))
            self._current = PlainTextSegmenter(io.StringIO(block), self.config,
                                               logger=self.log, meter=self.meter)

    def has_next(self) -> bool:
        self._prime()
        return self._next_sentence is not None

    def __next__(self) -> List[Token]:
        self._prime()
        if self._next_sentence is None:
            raise ExhaustedError()
        sentence = self._next_sentence
        self._next_sentence = None
        return sentence

    def __iter__(self):
        return self
