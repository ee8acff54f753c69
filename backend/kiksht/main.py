from typing import Annotated, Any, Dict, List

from fastapi import Depends, FastAPI, HTTPException, Query, status
from pydantic import BaseModel, Field
from sqlalchemy.orm import Session

from kiksht.database import get_session, init_db
from kiksht.importer import split_records
from kiksht.parsing import DictionaryParseError, annotate, normalize, parse_record
from kiksht.services.dictionary import DictionaryService


class ParseRequest(BaseModel):
    record: str = Field(..., description="Raw text of a single dictionary record.")


class AnnotateRequest(BaseModel):
    text: str = Field(..., description="Analysed text with reference tags.")


class AnnotateResponse(BaseModel):
    markup: str


app = FastAPI(
    title="Kiksht Dictionary API",
    description="Lookup of parsed dictionary entries and gloss annotation",
    version="0.1.0",
)


@app.on_event("startup")
def on_startup() -> None:
    init_db()


DbSession = Annotated[Session, Depends(get_session)]


def _parse_error_detail(exc: DictionaryParseError) -> Dict[str, str]:
    return {"error": type(exc).__name__, "message": str(exc), "line": exc.line}


@app.get("/entries/{root}")
def get_entry(root: str, db: DbSession) -> Dict[str, Any]:
    entry = DictionaryService(db).get_entry(root)
    if entry is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Entry not found")
    return entry.to_dict()


@app.get("/search")
def search(query: Annotated[str, Query(min_length=1)], db: DbSession) -> List[Dict[str, Any]]:
    return [entry.to_dict() for entry in DictionaryService(db).search(query)]


@app.get("/suggest")
def suggest(term: Annotated[str, Query(min_length=1)], db: DbSession) -> List[str]:
    return DictionaryService(db).suggest(term)


@app.post("/parse")
def parse(payload: ParseRequest) -> Dict[str, Any]:
    records = split_records(payload.record)
    if len(records) != 1:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=f"Expected exactly one record, got {len(records)}",
        )
    try:
        entry = parse_record(records[0])
    except DictionaryParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=_parse_error_detail(exc),
        ) from exc
    return entry.to_dict()


@app.post("/annotate", response_model=AnnotateResponse)
def annotate_text(payload: AnnotateRequest) -> AnnotateResponse:
    try:
        markup = annotate(normalize(payload.text))
    except DictionaryParseError as exc:
        raise HTTPException(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            detail=_parse_error_detail(exc),
        ) from exc
    return AnnotateResponse(markup=markup)
