from .analysis import HexagramAnalysis, inverse, nuclear, nuclear_trigrams, opposite
from .catalog import CatalogEntry, HexagramCatalog, Trigram
from .engine import CoinEngine, LineGenerator, ReadingMethod, YarrowStalkEngine, create_engine
from .errors import CatalogInvariantViolation, IChingError, OutOfRange, SourceUnavailable
from .hexagram import Hexagram, HexagramAssembler, Reading, cast_reading
from .line_types import LineType, Polarity
from .randomness import LocalSource, RandomnessMode, RandomnessSource, RemoteSource, create_source
from .search import HexagramSearcher, SearchOperation, SequenceAnalysis, king_wen

__all__ = [
    "HexagramAnalysis",
    "opposite",
    "inverse",
    "nuclear",
    "nuclear_trigrams",
    "CatalogEntry",
    "HexagramCatalog",
    "Trigram",
    "LineGenerator",
    "YarrowStalkEngine",
    "CoinEngine",
    "ReadingMethod",
    "create_engine",
    "IChingError",
    "SourceUnavailable",
    "OutOfRange",
    "CatalogInvariantViolation",
    "Hexagram",
    "HexagramAssembler",
    "Reading",
    "cast_reading",
    "LineType",
    "Polarity",
    "RandomnessSource",
    "RandomnessMode",
    "LocalSource",
    "RemoteSource",
    "create_source",
    "HexagramSearcher",
    "SearchOperation",
    "SequenceAnalysis",
    "king_wen",
]
