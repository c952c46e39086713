import ingestion.csv_records as csv_records
import ingestion.json_records as json_records

_INGESTION_MODULES = {
    "csv": csv_records,
    "json": json_records,
}


def get_ingestion_module(module_name: str):
    """Get an ingestion module by format name."""
    if module_name not in _INGESTION_MODULES:
        raise ValueError(f"Unknown ingestion module: {module_name}")
    return _INGESTION_MODULES[module_name]


def get_available_modules():
    """Get list of available ingestion formats."""
    return list(_INGESTION_MODULES.keys())


def module_for_path(path):
    """Get the ingestion module matching a file's suffix (.csv or .json)."""
    suffix = str(path).rsplit(".", 1)[-1].lower()
    return get_ingestion_module(suffix)
