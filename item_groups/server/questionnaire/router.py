from __future__ import annotations

import logging
from typing import Iterator

from fastapi import APIRouter, Depends, HTTPException

from item_groups.ingest.pipeline import QuestionnairePipeline
from item_groups.server.settings import Settings, get_settings
from item_groups.storage import SQLiteCodedValueConfig, SQLiteCodedValueStore
from .models import CodedValuesCreate, CodedValuesCreated, QuestionModel, QuestionnaireResponse


logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/questionnaire", tags=["questionnaire"])


def get_coded_value_store(settings: Settings = Depends(get_settings)) -> Iterator[SQLiteCodedValueStore]:
    store = SQLiteCodedValueStore(SQLiteCodedValueConfig(db_path=settings.sqlite_db_path))
    store.initialize()
    try:
        yield store
    finally:
        store.close()


@router.get("/{guid}", response_model=QuestionnaireResponse)
def get_questionnaire(
    guid: str,
    store: SQLiteCodedValueStore = Depends(get_coded_value_store),
    settings: Settings = Depends(get_settings),
) -> QuestionnaireResponse:
    coded_values = store.get_coded_values(guid)
    if not coded_values:
        raise HTTPException(status_code=404, detail="Resource Not Found.")
    if settings.max_records is not None and len(coded_values) > settings.max_records:
        raise HTTPException(
            status_code=413,
            detail=f"Document has {len(coded_values)} coded values; the limit is {settings.max_records}.",
        )

    result = QuestionnairePipeline().run(coded_values)
    logger.info(
        "questionnaire_built guid=%s records=%s roots=%s dropped=%s max_nesting=%s",
        guid,
        result.stats.nodes,
        result.stats.roots,
        result.stats.dropped,
        result.stats.max_nesting,
    )
    if settings.max_depth is not None and result.stats.max_nesting > settings.max_depth:
        raise HTTPException(
            status_code=413,
            detail=f"Questionnaire nests {result.stats.max_nesting} levels; the limit is {settings.max_depth}.",
        )
    return {
        root_id: [QuestionModel.from_node(node) for node in nodes]
        for root_id, nodes in result.groups.items()
    }


@router.post("/{guid}/coded-values", response_model=CodedValuesCreated, status_code=201)
def add_coded_values(
    guid: str,
    payload: CodedValuesCreate,
    store: SQLiteCodedValueStore = Depends(get_coded_value_store),
) -> CodedValuesCreated:
    written = store.add_coded_values(guid, payload.values, name=payload.name)
    return CodedValuesCreated(document_guid=guid, written=written)


@router.delete("/{guid}")
def delete_questionnaire(
    guid: str,
    store: SQLiteCodedValueStore = Depends(get_coded_value_store),
) -> dict[str, str]:
    if not store.delete_document(guid):
        raise HTTPException(status_code=404, detail="Resource Not Found.")
    return {"status": "deleted", "document_guid": guid}


__all__ = ["router", "get_coded_value_store"]
