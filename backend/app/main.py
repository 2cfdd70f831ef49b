from dotenv import load_dotenv
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from backend.core.logger import get_logger, set_level
from backend.core.sequence_store import get_sequence_store
from backend.core.settings import get_settings
from backend.app.routes_fibonacci import router as fibonacci_router

# === ЗАГРУЗКА ENV ===
load_dotenv()
settings = get_settings()

# === ЛОГГЕР ===
set_level(settings.log_level)
log = get_logger("main")

app = FastAPI(title="Fibonacci Sequence API")

# === CORS ===
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.on_event("startup")
async def startup_event():
    log.info("🚀 Backend has started")
    log.info(f"ENV FIBONACCI_STORAGE_PATH: {settings.storage_path}")
    log.info(f"ENV FIBONACCI_SEQUENCE_FILE: {settings.sequence_file}")
    log.info(f"ENV FIBONACCI_UNIQUE_FILE_NAMES: {settings.unique_file_names}")
    log.info(f"ENV FIBONACCI_MAX_POSITION: {settings.max_position}")

    # Некорректное FIBONACCI_SEQUENCE_FILE роняет старт, а не запросы
    store = get_sequence_store()
    log.info(f"✅ Хранилище последовательностей: {store.storage_path / store.file_name}")


@app.get("/health")
def health():
    return {"status": "ok"}


# === РОУТЫ ===
app.include_router(fibonacci_router)
