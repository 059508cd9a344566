"""FastAPI application exposing the instructions search over HTTP."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Any, AsyncIterator, Dict, List

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, field_validator

from instructfinder import __version__
from instructfinder.config import AppConfig
from instructfinder.index.indexer import InstructionsIndex
from instructfinder.tools.instructions import (
    TOOL_NAME,
    InstructionsTool,
    coerce_max_sections,
    preprocess,
)

LOGGER = logging.getLogger(__name__)


class SearchPayload(BaseModel):
    query: str
    max_sections: int | None = None

    @field_validator("max_sections", mode="before")
    @classmethod
    def _coerce_max_sections(cls, value: Any) -> int | None:
        return coerce_max_sections(value)


class SectionHit(BaseModel):
    title: str
    level: int
    score: float
    content: str


def _get_tool(request: Request) -> InstructionsTool:
    tool = getattr(request.app.state, "tool", None)
    if tool is None:
        raise HTTPException(status_code=503, detail="Index not loaded yet")
    return tool


def create_app(
    index: InstructionsIndex | None = None, config: AppConfig | None = None
) -> FastAPI:
    """Build the HTTP app around an index.

    Without an explicit index, the configured document is indexed once when
    the app starts.
    """
    config = config or AppConfig()

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logging.basicConfig(level=logging.INFO, format="[%(levelname)s] %(message)s")
        if app.state.tool is None:
            document = config.resolve_document_path(Path.cwd())
            built = InstructionsIndex.from_path(document, boosts=config.keyword_boosts())
            app.state.tool = InstructionsTool(built, config)
        LOGGER.info("Serving %d sections", len(app.state.tool.index))
        yield

    app = FastAPI(title="InstructFinder", version=__version__, lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.state.config = config
    app.state.tool = InstructionsTool(index, config) if index is not None else None

    @app.get("/tools")
    async def list_tools(request: Request) -> Dict[str, Any]:
        return {"tools": [_get_tool(request).definition]}

    @app.post(f"/tools/{TOOL_NAME}")
    async def call_tool(request: Request, arguments: Dict[str, Any]) -> Dict[str, Any]:
        result = _get_tool(request).handle(arguments)
        return result.to_payload()

    @app.post("/search")
    async def search_sections(request: Request, payload: SearchPayload) -> Dict[str, List[SectionHit]]:
        tool = _get_tool(request)
        if not payload.query.strip():
            raise HTTPException(status_code=400, detail="Empty query")

        prepared = preprocess(payload.query, payload.max_sections, config=tool.config)
        if prepared is None:
            raise HTTPException(status_code=400, detail="Query only contains trigger phrases")

        results = tool.index.search(prepared.query, max_sections=prepared.max_sections)
        return {
            "results": [
                SectionHit(
                    title=item.title,
                    level=item.level,
                    score=item.score,
                    content=item.content,
                )
                for item in results
            ]
        }

    @app.get("/sections")
    async def list_sections(request: Request) -> Dict[str, Any]:
        """List the indexed sections in document order."""
        index = _get_tool(request).index
        return {
            "sections": [{"title": s.title, "level": s.level} for s in index.sections],
            "count": len(index),
        }

    return app


app = create_app()
