def is_filled(v: str | None) -> bool:
    return bool(v)


def require_non_negative(v: int, name: str = "value") -> None:
    if v < 0:
        raise ValueError(f"{name} must be >= 0")


def require_int(v: object, name: str = "value") -> int:
    # bool - подкласс int, его не пускаем
    if isinstance(v, bool) or not isinstance(v, int):
        raise ValueError(f"{name} must be an integer, got {v!r}")
    return v


def require_optional_bool(v: object, name: str = "value") -> bool | None:
    if v is not None and not isinstance(v, bool):
        raise ValueError(f"{name} must be true/false, got {v!r}")
    return v
