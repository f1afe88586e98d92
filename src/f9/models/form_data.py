"""Opaque multipart body"""

from typing import IO, Iterator, List, Optional, Tuple, Union


FileContent = Union[bytes, str, IO[bytes]]


class FormData:
    """
    Multipart form body

    Passed through the request builder untouched; the transport encodes it
    and sets the multipart boundary itself.

    Example:
        >>> form = FormData()
        >>> form.append("key", "value")
        >>> client.post("/upload", body=form)
    """

    def __init__(self, fields: Optional[dict] = None) -> None:
        self._fields: List[Tuple[str, str]] = []
        self._files: List[Tuple[str, Tuple[Optional[str], FileContent, Optional[str]]]] = []
        for name, value in (fields or {}).items():
            self.append(name, value)

    def append(self, name: str, value: object) -> None:
        """Append a text field"""
        self._fields.append((name, str(value)))

    def append_file(
        self,
        name: str,
        content: FileContent,
        filename: Optional[str] = None,
        content_type: Optional[str] = None,
    ) -> None:
        """Append a file part

        Streams are read right away so the body can be sent again on retry.
        """
        if hasattr(content, "read"):
            content = content.read()
        self._files.append((name, (filename or name, content, content_type)))

    def get(self, name: str) -> Optional[str]:
        """First text value stored under name"""
        for key, value in self._fields:
            if key == name:
                return value
        return None

    @property
    def fields(self) -> List[Tuple[str, str]]:
        return list(self._fields)

    def to_multipart(self) -> list:
        """Parts in the shape ``requests`` expects for ``files=``

        Text fields are sent as parts without a filename so the body is
        multipart even when no file was appended.
        """
        parts: list = [(name, (None, value)) for name, value in self._fields]
        parts.extend(self._files)
        return parts

    def __iter__(self) -> Iterator[Tuple[str, str]]:
        return iter(self._fields)

    def __len__(self) -> int:
        return len(self._fields) + len(self._files)

    def __repr__(self) -> str:
        names = [name for name, _ in self._fields] + [name for name, _ in self._files]
        return f"FormData({names!r})"
