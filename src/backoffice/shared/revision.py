"""Copy-on-write edits for aggregates mirrored from the backend."""


def revise(entity, editable: tuple[str, ...], **changes):
    """Return a new instance of ``entity``'s class with the same id and ``changes`` applied.

    Only the names in ``editable`` may change; anything else raises
    ValueError. The original instance is left untouched.
    """
    unknown = set(changes) - set(editable)
    if unknown:
        raise ValueError(f"Not editable on {type(entity).__name__}: {', '.join(sorted(unknown))}")

    values = {field: getattr(entity, field) for field in editable}
    values.update(changes)
    return type(entity)(id=entity.id, **values)
