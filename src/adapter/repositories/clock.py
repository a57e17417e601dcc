from sqlalchemy import func


def store_now():
    """
    The database clock, used in every validity predicate.

    Token expiry is compared against the store's clock rather than the
    application host's. The database session must run in UTC because the
    DateTime columns are naive UTC.

    On SQLite CURRENT_TIMESTAMP has one-second precision and is compared as
    text against stored values that carry microseconds, so a token can
    remain valid for up to one second past expires_at.
    """
    return func.current_timestamp()
