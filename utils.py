# utils.py
import datetime
import math
from decimal import Decimal
from typing import Any, Iterable, List, Union

from babel import Locale
from babel.dates import format_skeleton
from babel.numbers import format_currency as _babel_currency

from models import YAxis

ELLIPSIS = "..."


def format_currency(amount: Union[int, str, Decimal]) -> str:
  """Cents -> "$1,250.00"."""
  return _babel_currency(Decimal(amount) / 100, "USD", locale="en_US")


def _parse_date(value: Union[str, datetime.date]) -> datetime.date:
  if isinstance(value, datetime.datetime):
    return value.date()
  if isinstance(value, datetime.date):
    return value
  s = (value or "").strip()
  if s.endswith("Z"):
    s = s[:-1] + "+00:00"
  try:
    return datetime.datetime.fromisoformat(s).date()
  except ValueError:
    raise ValueError(f"Invalid date string: {value!r}") from None


def format_date_to_local(date_str: Union[str, datetime.date], locale: str = "en-US") -> str:
  """
  Day, abbreviated month and year in the given locale, e.g. "Dec 6, 2022".
  Only ISO-8601 dates/datetimes are accepted; anything else raises ValueError.
  """
  d = _parse_date(date_str)
  return format_skeleton("yMMMd", d, locale=Locale.parse(locale, sep="-" if "-" in locale else "_"))


def _revenue_value(month: Any) -> int:
  if isinstance(month, dict):
    return month["revenue"]
  return month.revenue


def generate_y_axis(revenue: Iterable[Any]) -> YAxis:
  # labels in $1K steps from the highest record (rounded up) down to $0K
  values = [_revenue_value(m) for m in revenue]
  highest_record = max(values, default=0)
  top_label = math.ceil(highest_record / 1000) * 1000

  y_axis_labels = [f"${i // 1000}K" for i in range(top_label, -1, -1000)]
  return YAxis(y_axis_labels=y_axis_labels, top_label=top_label)


def generate_pagination(current_page: int, total_pages: int) -> List[Union[int, str]]:
  if total_pages <= 7:
    return list(range(1, total_pages + 1))

  if current_page <= 3:
    return [1, 2, 3, ELLIPSIS, total_pages - 1, total_pages]

  if current_page >= total_pages - 2:
    return [1, 2, ELLIPSIS, total_pages - 2, total_pages - 1, total_pages]

  return [
    1,
    ELLIPSIS,
    current_page - 1,
    current_page,
    current_page + 1,
    ELLIPSIS,
    total_pages,
  ]
