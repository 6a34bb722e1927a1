"""zhdict-loader: load CEDICT and MoeDict data into a relational database."""

__version__ = "0.3.0"

from zhdict_loader.cedict import (
    check_consistency as check_consistency,
    iter_records as iter_records,
    parse_line as parse_line,
)
from zhdict_loader.config import (
    LoaderConfig as LoaderConfig,
    load_config_file as load_config_file,
)
from zhdict_loader.encoding import (
    LIST_DELIMITER as LIST_DELIMITER,
    encode_literal as encode_literal,
    join_list as join_list,
    split_list as split_list,
)
from zhdict_loader.exceptions import (
    ConfigError as ConfigError,
    ConsistencyError as ConsistencyError,
    DataDecodeError as DataDecodeError,
    MalformedLineError as MalformedLineError,
    StorageError as StorageError,
    ZhdictLoaderError as ZhdictLoaderError,
)
from zhdict_loader.flattener import (
    IdAllocator as IdAllocator,
    flatten as flatten,
    iter_rows as iter_rows,
)
from zhdict_loader.loader import (
    load_dump as load_dump,
    load_files as load_files,
    load_lexicon as load_lexicon,
    read_inputs as read_inputs,
    run as run,
)
from zhdict_loader.models import (
    EntryNode as EntryNode,
    EntryRow as EntryRow,
    FlattenedDump as FlattenedDump,
    LexiconRecord as LexiconRecord,
    LoadSummary as LoadSummary,
    SenseNode as SenseNode,
    SenseRow as SenseRow,
    VariantNode as VariantNode,
    VariantRow as VariantRow,
)
from zhdict_loader.moedict import decode_dump as decode_dump

__all__ = [
    # Parsing
    "parse_line",
    "iter_records",
    "check_consistency",
    "decode_dump",
    # Flattening
    "IdAllocator",
    "flatten",
    "iter_rows",
    # Encoding
    "LIST_DELIMITER",
    "encode_literal",
    "join_list",
    "split_list",
    # Loading
    "LoaderConfig",
    "load_config_file",
    "load_lexicon",
    "read_inputs",
    "load_dump",
    "load_files",
    "run",
    # Models
    "LexiconRecord",
    "EntryNode",
    "VariantNode",
    "SenseNode",
    "EntryRow",
    "VariantRow",
    "SenseRow",
    "FlattenedDump",
    "LoadSummary",
    # Exceptions
    "ZhdictLoaderError",
    "ConfigError",
    "MalformedLineError",
    "ConsistencyError",
    "DataDecodeError",
    "StorageError",
]
