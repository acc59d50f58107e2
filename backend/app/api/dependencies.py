from app.storage.csv_store import CsvStore, csv_store


def get_user_store() -> CsvStore:
    """
    Get the backing CSV store.

    FastAPI dependency used by the user routes. Tests swap in a store on a
    temporary path through `app.dependency_overrides`.
    """
    return csv_store
