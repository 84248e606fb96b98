from __future__ import annotations

import logging
from typing import List

from fastapi import FastAPI, HTTPException, Query
from fastapi.responses import JSONResponse

from iching_oracle import __version__
from iching_oracle.algo.analysis import HexagramAnalysis
from iching_oracle.algo.catalog import HexagramCatalog
from iching_oracle.algo.engine import ReadingMethod
from iching_oracle.algo.errors import OutOfRange, SourceUnavailable
from iching_oracle.algo.hexagram import HexagramAssembler, cast_reading
from iching_oracle.algo.line_types import LineType
from iching_oracle.algo.randomness import RandomnessMode
from iching_oracle.algo.search import HexagramSearcher
from iching_oracle.config import Settings
from .schemas import (
    AnalysisResponse,
    AssembleInput,
    CatalogEntryResponse,
    ReadingInput,
    ReadingResponse,
    ShortestPathResponse,
)

logger = logging.getLogger(__name__)

settings = Settings.from_env()
# load and validate the table before serving anything
catalog = HexagramCatalog.get()

app = FastAPI(title="I Ching Oracle API", version=__version__)


def _parse_lines(items: List[object]) -> List[LineType]:
    """Turn submitted lines (names or values) into `LineType`s."""
    if len(items) != 6:
        raise ValueError(f"a hexagram has six lines, got {len(items)}")
    return [LineType.parse(item) for item in items]


@app.get("/", response_class=JSONResponse)
async def health():
    return {"status": "ok"}


@app.post("/api/reading", response_model=ReadingResponse)
def reading(input: ReadingInput):
    """Cast a reading; blocks on random.org when randomness is `random`."""
    try:
        method = ReadingMethod(input.method)
        randomness = RandomnessMode(input.randomness)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    try:
        result = cast_reading(method, randomness, input.question, settings=settings, seed=input.seed)
    except SourceUnavailable as e:
        logger.warning("Reading failed: %s", e)
        raise HTTPException(status_code=503, detail=f"Random source unavailable: {e}")
    return result.to_dict()


@app.post("/api/assemble", response_model=ReadingResponse)
def assemble(input: AssembleInput):
    """Assemble a reading from lines cast elsewhere."""
    try:
        lines = _parse_lines(input.lines)
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return HexagramAssembler(catalog).assemble(lines, question=input.question).to_dict()


@app.get("/api/hexagrams/{number}", response_model=CatalogEntryResponse)
def hexagram(number: int):
    try:
        entry = catalog.lookup_by_number(number)
    except OutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))
    analysis = HexagramAnalysis.for_pattern(entry.pattern, catalog).to_dict()
    return {
        **analysis["hexagram"],
        "chinese": entry.chinese,
        "lower_trigram": analysis["lower_trigram"],
        "upper_trigram": analysis["upper_trigram"],
    }


@app.get("/api/analyze/{identifier}", response_model=AnalysisResponse)
def analyze(identifier: str):
    try:
        entry = catalog.resolve(identifier)
    except OutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    return HexagramAnalysis.for_pattern(entry.pattern, catalog).to_dict()


@app.get("/api/shortest-path", response_model=ShortestPathResponse)
def shortest_path(
    start: int = Query(..., description="King Wen number to start from"),
    end: int = Query(..., description="King Wen number to reach"),
    all: bool = Query(False, description="Return every shortest path, not only the fewest line changes"),
):
    try:
        searcher = HexagramSearcher(start, end, catalog)
    except OutOfRange as e:
        raise HTTPException(status_code=404, detail=str(e))

    paths = []
    for path in searcher.find_shortest_paths(all):
        steps = []
        for pattern, op in path:
            entry = catalog.lookup_by_pattern(pattern)
            steps.append(
                {
                    "number": entry.number,
                    "name": entry.name,
                    "pinyin": entry.pinyin,
                    "binary": entry.binary,
                    "operation": op.label,
                }
            )
        paths.append(steps)
    return {"start": start, "end": end, "paths": paths}
