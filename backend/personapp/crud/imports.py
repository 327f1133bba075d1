from sqlalchemy.orm import Session
from personapp.db.models.import_status import ImportStatus
from personapp.services.jobs import ImportJob

def add_import_status(db: Session, job: ImportJob) -> ImportStatus:
    row = ImportStatus(
        job_id=job.id,
        file_name=job.file_name,
        state=job.state.value,
        started_at=job.start_time,
        finished_at=job.end_time,
        processed_rows=job.processed_rows,
        error=job.error,
        failed_row=job.failed_row,
    )
    db.add(row)
    db.commit()
    db.refresh(row)
    return row

def get_import_status(db: Session, job_id: str) -> ImportStatus | None:
    return db.query(ImportStatus).filter(ImportStatus.job_id==job_id).one_or_none()

def list_import_statuses(db: Session):
    return db.query(ImportStatus).order_by(ImportStatus.id.desc()).all()
