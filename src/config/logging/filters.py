"""Filter que marca cada record com a chamada hAPI em andamento."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Callable


class RequestIdFilter(logging.Filter):
    """Preenche `service` e `request_id` nos records.

    `request_id_getter` costuma ser app.observability.get_request_id; sem ele
    o campo fica vazio.
    """

    def __init__(
        self,
        service_name: str,
        request_id_getter: Callable[[], str] | None = None,
    ) -> None:
        super().__init__()
        self._service_name = service_name
        self._get_request_id = request_id_getter or (lambda: "")

    def filter(self, record: logging.LogRecord) -> bool:
        # request_id passado em `extra` tem precedência
        existing = getattr(record, "request_id", None)
        record.request_id = existing if existing else self._get_request_id()
        record.service = self._service_name
        return True
