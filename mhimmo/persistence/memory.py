"""In-process key-value backend."""


class MemoryBackend:
    """Key-value slots held in a dict; nothing survives the process."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._slots: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> str | None:
        return self._slots.get(key)

    def set(self, key: str, value: str) -> None:
        self._slots[key] = value

    def delete(self, key: str) -> None:
        self._slots.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._slots)

    def close(self) -> None:
        pass
