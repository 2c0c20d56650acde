"""Dataset registry, CSV parsing, normalization, and the record store."""
from .errors import (
    DataError, EmptyOrUnrecognizedFormat, SchemaMismatch, FileNameMismatch,
    InvalidRecord, UnknownDataset, PersistenceFailure,
)
from .schemas import DatasetDescriptor, NormalizedTuple, Orientation, ViewKind
from .registry import DATASETS, get_descriptor, dataset_ids
from .normalize import parse_count, record_to_tuples
from .store import RecordStore, StoreRegistry
