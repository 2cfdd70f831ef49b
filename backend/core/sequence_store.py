import os
import re
import threading
import uuid
from functools import lru_cache
from pathlib import Path
from typing import List, Sequence

from backend.core.logger import get_logger
from backend.core.settings import get_settings
from backend.service.errors import InvalidInputError, NotFoundError, StorageError

__all__ = [
    "SequenceStore",
    "format_sequence",
    "parse_sequence",
    "get_sequence_store",
]

log = get_logger("sequence_store")

# Только \n, \r и \r\n; прочие юникодные разделители остаются в тексте
_LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")

DEFAULT_FILE_NAME = "fibonacci.txt"


def format_sequence(sequence: Sequence[int]) -> str:
    """Сериализует последовательность в вид ``[0, 1, 1, 2]``."""
    return "[" + ", ".join(str(int(value)) for value in sequence) + "]"


def parse_sequence(text: str) -> List[int]:
    """Обратное к ``format_sequence``: ``"[0, 1, 1]"`` -> ``[0, 1, 1]``."""
    body = text.strip()
    if not (body.startswith("[") and body.endswith("]")):
        raise InvalidInputError("Содержимое файла не похоже на список чисел")

    body = body[1:-1].strip()
    if not body:
        return []

    try:
        return [int(item) for item in body.split(",")]
    except ValueError as exc:
        raise InvalidInputError(f"Некорректный элемент последовательности: {exc}") from exc


def _is_bare_file_name(file_name: str) -> bool:
    return bool(file_name) and (
        file_name not in {".", ".."}
        and Path(file_name).name == file_name
        and "\\" not in file_name
        and "\x00" not in file_name
    )


class SequenceStore:
    """Хранилище последовательностей в текстовых файлах внутри ``storage_path``.

    По умолчанию все записи идут в один файл ``file_name`` (последний
    записавший побеждает). С ``unique_file_names=True`` каждая запись получает
    своё имя. Записи сериализуются блокировкой; файл подменяется через
    ``os.replace``, поэтому читатели идут без блокировки и всегда видят
    либо старое, либо новое содержимое целиком.
    """

    def __init__(
        self,
        storage_path,
        file_name: str = DEFAULT_FILE_NAME,
        unique_file_names: bool = False,
    ):
        if not _is_bare_file_name(file_name):
            raise ValueError(f"Имя файла хранилища должно быть без каталогов: {file_name!r}")
        self.storage_path = Path(storage_path)
        self.file_name = file_name
        self.unique_file_names = unique_file_names
        self._lock = threading.Lock()

    def _ensure_storage_dir(self) -> None:
        self.storage_path.mkdir(parents=True, exist_ok=True)

    def _next_file_name(self) -> str:
        if not self.unique_file_names:
            return self.file_name
        stem, suffix = os.path.splitext(self.file_name)
        return f"{stem}-{uuid.uuid4().hex}{suffix}"

    def _resolve(self, file_name: str) -> Path:
        if not _is_bare_file_name(file_name):
            raise InvalidInputError(f"Некорректное имя файла: {file_name!r}")
        return self.storage_path / file_name

    def store(self, sequence: Sequence[int]) -> str:
        """Записывает последовательность и возвращает имя файла."""
        file_name = self._next_file_name()
        path = self.storage_path / file_name
        tmp_path = path.with_name(f".{file_name}.{uuid.uuid4().hex}.tmp")
        content = format_sequence(sequence)

        with self._lock:
            try:
                self._ensure_storage_dir()
                with open(tmp_path, "w", encoding="utf-8") as f:
                    f.write(content)
                    f.flush()
                os.replace(tmp_path, path)
            except OSError as exc:
                log.error("Ошибка записи %s: %s", path, exc)
                if tmp_path.exists():
                    tmp_path.unlink()
                raise StorageError(f"Не удалось сохранить последовательность: {exc}") from exc

        log.info("Сохранена последовательность (%s чисел) в %s", len(sequence), path)
        return file_name

    def retrieve(self, file_name: str) -> str:
        """Возвращает содержимое файла, строки склеены без разделителей."""
        path = self._resolve(file_name)

        try:
            with open(path, "r", encoding="utf-8", newline="") as f:
                content = f.read()
        except FileNotFoundError as exc:
            raise NotFoundError(
                f"Файл {file_name} не найден. Проверьте запрос и попробуйте снова"
            ) from exc
        except (OSError, UnicodeDecodeError) as exc:
            log.error("Ошибка чтения %s: %s", path, exc)
            raise StorageError(f"Не удалось прочитать файл {file_name}: {exc}") from exc

        return "".join(_LINE_BREAK_RE.split(content))

    def load(self, file_name: str) -> List[int]:
        """Читает файл и разбирает его обратно в список чисел."""
        return parse_sequence(self.retrieve(file_name))



@lru_cache(maxsize=1)
def get_sequence_store() -> SequenceStore:
    """Единственный на процесс экземпляр хранилища (FastAPI-зависимость)."""
    settings = get_settings()
    return SequenceStore(
        settings.storage_path,
        file_name=settings.sequence_file,
        unique_file_names=settings.unique_file_names,
    )
