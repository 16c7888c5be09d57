from sqlalchemy import inspect as sa_inspect


def find_unknown_model_kwargs(model, kwargs: dict) -> list[str]:
    """
    Return the keys of ``kwargs`` that are not writable columns of ``model``.

    Primary keys are assigned by the store and are never writable.
    """
    mapper = sa_inspect(model)
    allowed = {
        attr.key
        for attr in mapper.column_attrs
        if not attr.columns[0].primary_key
    }
    return [k for k in kwargs if k not in allowed]


def get_required_columns(model) -> list[str]:
    """
    Columns that are NOT NULL and have no server/default and are not simple auto PKs.
    """
    cols = []
    for col in model.__table__.columns:
        has_default = col.default is not None or col.server_default is not None
        is_auto_pk = col.primary_key and col.autoincrement in (True, "auto")
        if not col.nullable and not has_default and not is_auto_pk:
            cols.append(col.name)
    return cols
