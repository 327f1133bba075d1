from personapp.core.config import Settings, settings as default_settings
from personapp.core.logging import configure_logging, logger
from personapp.db.base import Base
import personapp.db.models  # noqa: F401  (registers models on Base.metadata)
from personapp.db.session import make_engine, make_session_factory
from personapp.services.coordinator import ImportCoordinator
from personapp.services.etl.dispatcher import default_dispatcher
from personapp.services.sinks import SqlPersonSink, SqlStatusHistorySink


def create_import_service(settings: Settings | None = None) -> ImportCoordinator:
    settings = settings or default_settings
    configure_logging(settings.ENV, settings.LOG_LEVEL)

    engine = make_engine(settings.DATABASE_URL)
    if settings.CREATE_TABLES:
        # dev convenience; in prod the schema is managed outside the app
        Base.metadata.create_all(bind=engine)
    session_factory = make_session_factory(engine)

    coordinator = ImportCoordinator(
        dispatcher=default_dispatcher(),
        person_sink=SqlPersonSink(session_factory),
        history_sink=SqlStatusHistorySink(session_factory),
        row_delay=settings.IMPORT_ROW_DELAY_SECONDS,
        reset_progress_on_failure=settings.IMPORT_RESET_PROGRESS_ON_FAILURE,
        csv_delimiter=settings.IMPORT_CSV_DELIMITER,
        encoding=settings.IMPORT_ENCODING,
    )
    logger.info("import_service_started", env=settings.ENV)
    return coordinator
