from collections import OrderedDict
from typing import List, Tuple

from skycast.models import CurrentWeather
from skycast.services.display import format_timestamp

LABEL_SEPARATOR = " - "


def history_label(weather: CurrentWeather) -> str:
    return f"{weather.city_name}{LABEL_SEPARATOR}{format_timestamp(weather.timestamp)}"


def city_from_label(label: str) -> str:
    idx = label.find(LABEL_SEPARATOR)
    if idx < 0:
        return label
    return label[:idx]


class SearchHistory:
    """
    Most recent successful lookups, one per city, newest first.

    Holds at most `max_entries`; adding a city already present replaces its
    entry and moves it to the front.
    """

    def __init__(self, max_entries: int = 15):
        self.max_entries = max_entries
        self._entries: "OrderedDict[str, Tuple[str, CurrentWeather]]" = OrderedDict()

    def add(self, weather: CurrentWeather) -> str:
        key = weather.city_name.strip().lower()
        label = history_label(weather)
        self._entries.pop(key, None)
        self._entries[key] = (label, weather)
        while len(self._entries) > self.max_entries:
            self._entries.popitem(last=False)
        return label

    def items(self) -> List[Tuple[str, CurrentWeather]]:
        return list(reversed(self._entries.values()))

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)
