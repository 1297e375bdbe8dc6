"""
Batch Recognition Orchestrator.

This module drives recognition over a batch of images, one image at a
time. Each image is recognized, adapted and formatted; a failure on one
image is replaced by a failure marker and the batch continues.

Batch states:
    IDLE -> RUNNING(current_index) -> DONE | FAILED

Usage:
    from ocr_layout.batch import RecognitionOrchestrator

    orchestrator = RecognitionOrchestrator(mode="auto")
    result = orchestrator.run(["page1.png", "page2.png"])
    print(result.text)
"""

import asyncio
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence, Union

from config import get_config
from ocr_layout.ocr_engine.engine import BackendSpec, ImageSource, RecognitionEngine
from ocr_layout.ocr_engine.language import LanguageDetector
from ocr_layout.postprocessor.processor import LayoutKind, LayoutProcessor, RecognitionMode
from ocr_layout.utils.exceptions import BatchInProgressError, EngineUnavailableError, OCRError
from ocr_layout.utils.helpers import image_display_name
from ocr_layout.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

ProgressCallback = Callable[[float, str], None]

DEFAULT_FAILURE_MARKER = "Recognition failed: {name}"
DEFAULT_SEPARATOR = "\n\n"


class BatchStatus(str, Enum):
    """Lifecycle of one batch."""
    IDLE = "idle"
    RUNNING = "running"
    DONE = "done"
    FAILED = "failed"


@dataclass
class ImageOutcome:
    """
    Result slot for one image of a batch.

    Attributes:
        index: Position of the image in the batch
        name: Display name of the image
        text: Formatted text, or the failure marker
        success: False when the failure marker was substituted
        layout: Formatting path taken, None on failure
        language: Language profile used, when one was selected
        error: Error description on failure
    """
    index: int
    name: str
    text: str
    success: bool = True
    layout: Optional[LayoutKind] = None
    language: Optional[str] = None
    error: Optional[str] = None


@dataclass
class BatchResult:
    """Outcome of a whole batch, in input order."""
    status: BatchStatus
    outcomes: List[ImageOutcome] = field(default_factory=list)
    separator: str = DEFAULT_SEPARATOR

    @property
    def texts(self) -> List[str]:
        return [o.text for o in self.outcomes]

    @property
    def text(self) -> str:
        """Per-image texts separated by a blank line."""
        return self.separator.join(self.texts)

    @property
    def failed_count(self) -> int:
        return sum(1 for o in self.outcomes if not o.success)


class RecognitionOrchestrator:
    """
    Sequential recognition shell around the layout processor.

    Images are processed strictly one after another so that a single
    engine instance is never used concurrently and progress only moves
    forward. Recognition runs in a worker thread; the event loop is
    suspended only while awaiting it.

    Attributes:
        status: Current BatchStatus
        current_index: Index of the image being processed, or None
        processor: LayoutProcessor used for formatting

    Example:
        >>> orchestrator = RecognitionOrchestrator(engine=engine, mode="table")
        >>> result = orchestrator.run(images)
        >>> result.status
        <BatchStatus.DONE: 'done'>
    """

    def __init__(
        self,
        engine: Optional[RecognitionEngine] = None,
        backends: Optional[Sequence[BackendSpec]] = None,
        mode: Union[RecognitionMode, str, None] = None,
        processor: Optional[LayoutProcessor] = None,
        language: Optional[str] = None,
        auto_detect_language: Optional[bool] = None,
        language_detector: Optional[LanguageDetector] = None,
        failure_marker: Optional[str] = None,
        separator: Optional[str] = None,
        progress_callback: Optional[ProgressCallback] = None
    ) -> None:
        """
        Initialize the orchestrator.

        Args:
            engine: Recognition engine; built on first use when omitted.
            backends: Ranked backends for the engine built on first use;
                defaults to ``ocr.engines``.
            mode: Recognition mode passed to a default processor.
            processor: Preconfigured LayoutProcessor.
            language: Fixed language profile; disables auto-detection.
            auto_detect_language: Defaults to ``ocr.language.auto_detect``.
            language_detector: Detector used for auto-detection.
            failure_marker: Format string with ``{name}`` substituted
                for failed images.
            separator: Separator between image texts in BatchResult.text.
            progress_callback: Called with (percent, message).

        Raises:
            ValueError: If the failure marker has fields other than
                ``{name}``.
        """
        self._engine = engine
        self.backends = backends
        self._engine_error: Optional[EngineUnavailableError] = None
        self.processor = processor or LayoutProcessor(mode=mode)
        self.language = language
        if auto_detect_language is None:
            auto_detect_language = get_config("ocr.language.auto_detect", True)
        self.auto_detect_language = auto_detect_language
        self.language_detector = language_detector or LanguageDetector()
        self.failure_marker = failure_marker or get_config(
            "batch.failure_marker", DEFAULT_FAILURE_MARKER
        )
        try:
            self.failure_marker.format(name="")
        except (AttributeError, KeyError, IndexError, ValueError) as e:
            raise ValueError(
                f"Invalid failure marker {self.failure_marker!r}: only {{name}} may be substituted"
            ) from e
        self.separator = separator if separator is not None else get_config(
            "batch.separator", DEFAULT_SEPARATOR
        )
        self.progress_callback = progress_callback

        self.status = BatchStatus.IDLE
        self.current_index: Optional[int] = None

    def _get_engine(self) -> RecognitionEngine:
        """
        Return the engine, building it on first use.

        Raises:
            EngineUnavailableError: If no backend can be initialized.
        """
        if self._engine is None:
            if self._engine_error is not None:
                raise self._engine_error
            try:
                self._engine = RecognitionEngine(self.backends)
            except EngineUnavailableError as e:
                self._engine_error = e
                raise
        return self._engine

    def _report_progress(self, percent: float, message: str) -> None:
        logger.debug(f"Progress {percent:.0f}%: {message}")
        if self.progress_callback is not None:
            self.progress_callback(percent, message)

    async def _resolve_language(self, engine: RecognitionEngine, image: ImageSource) -> Optional[str]:
        if self.language:
            return self.language
        if not (self.auto_detect_language and engine.supports_language_selection):
            return None
        return await asyncio.to_thread(self.language_detector.detect, engine, image)

    async def process_image(self, image: ImageSource, index: int = 0) -> ImageOutcome:
        """
        Recognize and format a single image.

        Recognition errors are not raised; they produce an outcome
        carrying the failure marker.

        Args:
            image: PIL Image or path.
            index: Position of the image in its batch.

        Returns:
            ImageOutcome for the image.
        """
        name = image_display_name(image, index)
        language = None

        try:
            engine = await asyncio.to_thread(self._get_engine)
            language = await self._resolve_language(engine, image)
            result = await asyncio.to_thread(engine.recognize, image, language)
            formatted = self.processor.process(result)
        except OCRError as e:
            logger.warning(f"Image {index + 1} ({name}) failed: {e}")
            return ImageOutcome(
                index=index,
                name=name,
                text=self.failure_marker.format(name=name),
                success=False,
                language=language,
                error=str(e)
            )

        logger.info(
            f"Image {index + 1} ({name}) formatted as {formatted.layout.value} "
            f"({result.word_count} words)"
        )
        return ImageOutcome(
            index=index,
            name=name,
            text=formatted.text,
            layout=formatted.layout,
            language=language
        )

    async def process_batch(self, images: Sequence[Any]) -> BatchResult:
        """
        Process a batch of images in order.

        Args:
            images: PIL Images or paths.

        Returns:
            BatchResult with status DONE, even if every image failed.

        Raises:
            BatchInProgressError: If this orchestrator is already running.
        """
        if self.status is BatchStatus.RUNNING:
            raise BatchInProgressError(self.current_index)

        self.status = BatchStatus.RUNNING
        total = len(images)
        outcomes: List[ImageOutcome] = []
        logger.info(f"Starting batch of {total} images (mode={self.processor.mode.value})")

        try:
            self._report_progress(0.0, "Starting")
            for index, image in enumerate(images):
                self.current_index = index
                self._report_progress(index / total * 100, f"Processing image {index + 1} of {total}")
                outcomes.append(await self.process_image(image, index))
            self._report_progress(100.0, "Recognition complete")
        except Exception:
            self.status = BatchStatus.FAILED
            logger.exception("Batch aborted")
            raise
        finally:
            self.current_index = None

        self.status = BatchStatus.DONE
        result = BatchResult(status=self.status, outcomes=outcomes, separator=self.separator)
        logger.info(
            f"Batch done: {total - result.failed_count} succeeded, "
            f"{result.failed_count} failed"
        )
        return result

    def run(self, images: Sequence[Any]) -> BatchResult:
        """Synchronous entry point around ``process_batch``."""
        return asyncio.run(self.process_batch(images))
