import datetime as dt
from pydantic import BaseModel, ConfigDict

from personapp.services.jobs import ImportState

class ImportStatusOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    state: ImportState
    file_name: str | None
    start_time: dt.datetime
    end_time: dt.datetime | None
    processed_rows: int
    error: str | None
    failed_row: int | None

class ImportStatusRecordOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    job_id: str
    state: ImportState
    file_name: str | None
    started_at: dt.datetime
    finished_at: dt.datetime | None
    processed_rows: int
    error: str | None
    failed_row: int | None
