# import all models for metadata.create_all
from personapp.db.models.person import Person, Employee, Student, Retiree
from personapp.db.models.import_status import ImportStatus
