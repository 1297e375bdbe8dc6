"""
Recognition Result Data Classes.

This module defines the engine-agnostic data structures every backend
output is adapted into before layout reconstruction.

Classes:
    BoundingBox: Axis-aligned pixel box, y0 is the top edge
    RecognizedWord: One recognized token with box and confidence
    TextBlock: Text of one engine-reported line or paragraph
    RecognitionResult: Complete recognition output for an image
"""

from dataclasses import dataclass, field, replace
from typing import Any, Dict, List, Mapping, Optional, Sequence
import json

from ocr_layout.utils.exceptions import UnrecognizedResultShapeError


@dataclass(frozen=True)
class BoundingBox:
    """
    Axis-aligned bounding box in pixel coordinates.

    Attributes:
        x0: Left edge
        y0: Top edge
        x1: Right edge
        y1: Bottom edge
    """
    x0: float
    y0: float
    x1: float
    y1: float

    @property
    def width(self) -> float:
        return self.x1 - self.x0

    @property
    def height(self) -> float:
        return self.y1 - self.y0

    @classmethod
    def from_polygon(cls, points: Sequence[Sequence[float]]) -> 'BoundingBox':
        """
        Build the enclosing box of a polygon or quad.

        Detection models report boxes as ``[[x, y], ...]`` corner lists
        that need not be axis-aligned.

        Raises:
            UnrecognizedResultShapeError: If no usable points are given.
        """
        try:
            xs = [float(p[0]) for p in points]
            ys = [float(p[1]) for p in points]
        except (TypeError, ValueError, IndexError) as e:
            raise UnrecognizedResultShapeError(f"invalid polygon: {e}") from e

        if not xs:
            raise UnrecognizedResultShapeError("empty polygon")

        return cls(x0=min(xs), y0=min(ys), x1=max(xs), y1=max(ys))

    def to_dict(self) -> Dict[str, float]:
        return {'x0': self.x0, 'y0': self.y0, 'x1': self.x1, 'y1': self.y1}


@dataclass(frozen=True)
class RecognizedWord:
    """
    A single token produced by a recognition engine.

    Attributes:
        text: The recognized text content
        bbox: Pixel bounding box
        confidence: Recognition confidence in the range 0-1

    Example:
        >>> word = RecognizedWord("58", BoundingBox(100, 50, 130, 70), 0.93)
        >>> word.width
        30
    """
    text: str
    bbox: BoundingBox
    confidence: float = 0.0

    @property
    def x0(self) -> float:
        return self.bbox.x0

    @property
    def y0(self) -> float:
        return self.bbox.y0

    @property
    def x1(self) -> float:
        return self.bbox.x1

    @property
    def y1(self) -> float:
        return self.bbox.y1

    @property
    def width(self) -> float:
        return self.bbox.width

    @property
    def height(self) -> float:
        return self.bbox.height

    def to_dict(self) -> Dict[str, Any]:
        return {
            'text': self.text,
            'bbox': self.bbox.to_dict(),
            'confidence': self.confidence
        }

    def __repr__(self) -> str:
        return (
            f"RecognizedWord('{self.text}', "
            f"bbox=({self.x0}, {self.y0}, {self.x1}, {self.y1}), "
            f"conf={self.confidence:.2f})"
        )


@dataclass(frozen=True)
class TextBlock:
    """Text of an engine-reported line or paragraph."""
    text: str


@dataclass
class RecognitionResult:
    """
    Engine-agnostic recognition output for a single image.

    Attributes:
        full_text: Raw text as reported by the engine
        words: Recognized words with bounding boxes
        paragraphs: Paragraph texts, when the engine reports them
        lines: Line texts, when the engine reports them
        language: Language profile used for recognition
        engine: Name of the backend that produced the result
        processing_time: Seconds spent in the backend
        metadata: Additional backend details
    """
    full_text: str = ""
    words: List[RecognizedWord] = field(default_factory=list)
    paragraphs: List[TextBlock] = field(default_factory=list)
    lines: List[TextBlock] = field(default_factory=list)
    language: Optional[str] = None
    engine: str = "unknown"
    processing_time: float = 0.0
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def word_count(self) -> int:
        return len(self.words)

    @property
    def average_confidence(self) -> float:
        """Mean word confidence, 0.0 for an empty result."""
        if not self.words:
            return 0.0
        return sum(w.confidence for w in self.words) / len(self.words)

    def is_empty(self) -> bool:
        return not self.words and not self.full_text.strip()

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary format for serialization."""
        return {
            'text': self.full_text,
            'words': [w.to_dict() for w in self.words],
            'paragraphs': [{'text': p.text} for p in self.paragraphs],
            'lines': [{'text': l.text} for l in self.lines],
            'language': self.language,
            'engine': self.engine,
            'processing_time': self.processing_time,
            'metadata': self.metadata
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    @classmethod
    def from_dict(
        cls,
        data: Mapping[str, Any],
        engine: str = "external"
    ) -> 'RecognitionResult':
        """
        Adapt a mapping in the browser engine's shape into a result.

        Accepted shape::

            {"text": str,
             "words": [{"text": str,
                        "bbox": {"x0", "y0", "x1", "y1"} | [[x, y], ...],
                        "confidence": float}],
             "paragraphs": [{"text": str}],
             "lines": [{"text": str}]}

        Confidences above 1 are treated as percentages. An existing
        RecognitionResult is returned as a copy with its entries checked
        the same way.

        Raises:
            UnrecognizedResultShapeError: If the data cannot be mapped.
        """
        if isinstance(data, cls):
            # Backends may fill the dataclass with raw entries
            if not isinstance(data.full_text, str):
                raise UnrecognizedResultShapeError(
                    "'text' must be a string", type(data.full_text).__name__
                )
            return replace(
                data,
                words=[_word_from_dict(item) for item in _as_sequence(data.words, 'words')],
                paragraphs=[_block_from_dict(item) for item in _as_sequence(data.paragraphs, 'paragraphs')],
                lines=[_block_from_dict(item) for item in _as_sequence(data.lines, 'lines')]
            )
        if not isinstance(data, Mapping):
            raise UnrecognizedResultShapeError(
                "expected a mapping", type(data).__name__
            )

        full_text = data.get('text') or ""
        if not isinstance(full_text, str):
            raise UnrecognizedResultShapeError(
                "'text' must be a string", type(full_text).__name__
            )

        words = [_word_from_dict(item) for item in _as_list(data, 'words')]
        paragraphs = [_block_from_dict(item) for item in _as_list(data, 'paragraphs')]
        lines = [_block_from_dict(item) for item in _as_list(data, 'lines')]

        return cls(
            full_text=full_text,
            words=words,
            paragraphs=paragraphs,
            lines=lines,
            language=data.get('language'),
            engine=data.get('engine', engine)
        )

    def __repr__(self) -> str:
        return (
            f"RecognitionResult(engine='{self.engine}', words={self.word_count}, "
            f"confidence={self.average_confidence:.2f})"
        )


def normalize_confidence(value: Any) -> float:
    """Clamp a confidence to 0-1, rescaling 0-100 percentages."""
    conf = float(value)
    if conf > 1.0:
        conf /= 100.0
    return max(0.0, min(1.0, conf))


def _as_list(data: Mapping[str, Any], key: str) -> list:
    return _as_sequence(data.get(key), key)


def _as_sequence(value: Any, key: str) -> list:
    if value is None:
        return []
    if not isinstance(value, (list, tuple)):
        raise UnrecognizedResultShapeError(
            f"'{key}' must be a list", type(value).__name__
        )
    return list(value)


def _bbox_from_value(value: Any) -> BoundingBox:
    if isinstance(value, BoundingBox):
        return value
    if isinstance(value, Mapping):
        try:
            return BoundingBox(
                x0=float(value['x0']), y0=float(value['y0']),
                x1=float(value['x1']), y1=float(value['y1'])
            )
        except (KeyError, TypeError, ValueError) as e:
            raise UnrecognizedResultShapeError(f"invalid bbox: {e}") from e
    if isinstance(value, (list, tuple)):
        return BoundingBox.from_polygon(value)
    raise UnrecognizedResultShapeError("missing bbox", type(value).__name__)


def _word_from_dict(item: Any) -> RecognizedWord:
    if isinstance(item, RecognizedWord):
        return item
    if not isinstance(item, Mapping) or 'text' not in item:
        raise UnrecognizedResultShapeError(
            "word entries need 'text' and 'bbox'", type(item).__name__
        )
    try:
        confidence = normalize_confidence(item.get('confidence', 0.0))
    except (TypeError, ValueError) as e:
        raise UnrecognizedResultShapeError(f"invalid confidence: {e}") from e

    return RecognizedWord(
        text=str(item['text']),
        bbox=_bbox_from_value(item.get('bbox')),
        confidence=confidence
    )


def _block_from_dict(item: Any) -> TextBlock:
    if isinstance(item, TextBlock):
        return item
    if isinstance(item, Mapping) and isinstance(item.get('text', ""), str):
        return TextBlock(text=item.get('text', ""))
    raise UnrecognizedResultShapeError(
        "line and paragraph entries need a 'text' string", type(item).__name__
    )
