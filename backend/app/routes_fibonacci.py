from fastapi import APIRouter, Depends, Query
from fastapi.responses import JSONResponse, PlainTextResponse

from backend.core.logger import get_logger
from backend.core.sequence_store import SequenceStore, get_sequence_store
from backend.core.settings import Settings, get_settings
from backend.models.dto import SequenceResponse
from backend.service.errors import FibonacciError
from backend.service.fibonacci_service import (
    fibonacci_number,
    fibonacci_ratio,
    fibonacci_sequence,
    parse_integer,
)

router = APIRouter(prefix="/fibonacci", tags=["fibonacci"])
log = get_logger("routes.fibonacci")


def _error_response(exc: FibonacciError) -> JSONResponse:
    if exc.status_code >= 500:
        log.error("Ошибка %s: %s", type(exc).__name__, exc)
    else:
        log.warning("Отклонён запрос (%s): %s", type(exc).__name__, exc)
    return JSONResponse(status_code=exc.status_code, content={"detail": str(exc)})


@router.get("/findNumber", response_class=PlainTextResponse)
def find_number(
    n: str = Query(..., description="Позиция числа в последовательности"),
    settings: Settings = Depends(get_settings),
):
    """Число Фибоначчи на позиции ``n``."""
    try:
        value = fibonacci_number(parse_integer(n), settings.max_position)
    except FibonacciError as e:
        return _error_response(e)
    return PlainTextResponse(str(value))


@router.get("/findRatio", response_class=PlainTextResponse)
def find_ratio(
    n: str = Query(..., description="Позиция числа в последовательности"),
    settings: Settings = Depends(get_settings),
):
    """Отношение f(n) / f(n-1), приближение золотого сечения."""
    try:
        value = fibonacci_ratio(parse_integer(n), settings.max_position)
    except FibonacciError as e:
        return _error_response(e)
    return PlainTextResponse(str(value))


@router.post("/createSequence", response_class=PlainTextResponse)
def create_sequence(
    n: str = Query(..., description="Сколько чисел после f(0) сохранить"),
    store: SequenceStore = Depends(get_sequence_store),
):
    """Сохраняет последовательность f(0)..f(n) в файл и возвращает его имя."""
    try:
        sequence = fibonacci_sequence(n)
        file_name = store.store(sequence)
    except FibonacciError as e:
        return _error_response(e)
    return PlainTextResponse(file_name)


@router.get("/getSequence", response_class=PlainTextResponse)
def get_sequence(
    file_name: str = Query(..., alias="fileName", description="Имя сохранённого файла"),
    store: SequenceStore = Depends(get_sequence_store),
):
    """Содержимое ранее сохранённого файла."""
    try:
        content = store.retrieve(file_name)
    except FibonacciError as e:
        return _error_response(e)
    return PlainTextResponse(content)


@router.get("/sequence", response_model=SequenceResponse)
def preview_sequence(count: str = Query(..., description="Количество чисел после f(0)")):
    """Возвращает последовательность f(0)..f(count) в JSON, без сохранения."""
    try:
        sequence = fibonacci_sequence(count)
    except FibonacciError as e:
        return _error_response(e)
    return SequenceResponse(count=len(sequence) - 1, sequence=sequence, last=sequence[-1])
