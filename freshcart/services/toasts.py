# freshcart/services/toasts.py
from typing import List, Protocol

from freshcart.domain.schemas import Toast


class Notifier(Protocol):
    def notify(self, title: str, description: str = "", variant: str = "default") -> None: ...


class ToastFeed:
    """
    Zbiera toasty z jednej akcji uzytkownika.
    Router oddaje je w odpowiedzi przez drain().
    """

    def __init__(self):
        self._toasts: List[Toast] = []

    def notify(self, title: str, description: str = "", variant: str = "default") -> None:
        self._toasts.append(Toast(title=title, description=description, variant=variant))

    def drain(self) -> List[Toast]:
        toasts, self._toasts = self._toasts, []
        return toasts

    def __len__(self) -> int:
        return len(self._toasts)
