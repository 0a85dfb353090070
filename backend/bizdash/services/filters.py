"""
记录筛选

筛选状态是不可变值（FilterState），修改筛选条件得到新的状态；
apply_filters 把所有生效的条件做 AND 组合，"all"/空值表示不筛选。
"""

from dataclasses import dataclass, replace
from datetime import date, timedelta
from enum import Enum
from typing import Any, Callable, Iterable, List, Mapping, Optional, Tuple

from bizdash.services.calculations import coerce_number
from bizdash.services.records import get_field, to_date

ALL = "all"

Predicate = Callable[[Any], bool]


class DateRange(str, Enum):
    ALL = "all"
    TODAY = "today"
    WEEK = "week"    # 最近 7 天
    MONTH = "month"  # 最近 30 天


class StockFilter(str, Enum):
    ALL = "all"
    LOW = "low"          # 数量 ≤ 最低库存（包含缺货）
    OUT = "out"          # 数量 = 0
    IN_STOCK = "instock" # 数量 > 最低库存


DATE_RANGE_DAYS = {
    DateRange.WEEK: 7,
    DateRange.MONTH: 30,
}


@dataclass(frozen=True)
class FilterSpec:
    """资源的可筛选字段"""

    search_fields: Tuple[str, ...] = ()
    date_field: Optional[str] = None
    quantity_field: Optional[str] = None
    min_stock_field: Optional[str] = None

    @property
    def supports_stock(self) -> bool:
        return bool(self.quantity_field and self.min_stock_field)


@dataclass(frozen=True)
class FilterState:
    search: str = ""
    equals: Tuple[Tuple[str, str], ...] = ()
    date_range: DateRange = DateRange.ALL
    stock: StockFilter = StockFilter.ALL

    @classmethod
    def build(
        cls,
        search: Optional[str] = None,
        equals: Optional[Mapping[str, Any]] = None,
        date_range: Any = DateRange.ALL,
        stock: Any = StockFilter.ALL,
    ) -> "FilterState":
        state = cls(
            search=search or "",
            date_range=DateRange(date_range or DateRange.ALL),
            stock=StockFilter(stock or StockFilter.ALL),
        )
        for field, value in (equals or {}).items():
            state = state.with_equal(field, value)
        return state

    def with_search(self, term: Optional[str]) -> "FilterState":
        return replace(self, search=term or "")

    def with_equal(self, field: str, value: Any) -> "FilterState":
        """设置等值条件，值为空或 "all" 时移除该条件"""
        others = tuple((f, v) for f, v in self.equals if f != field)
        if _is_blank(value):
            return replace(self, equals=others)
        return replace(self, equals=tuple(sorted(others + ((field, str(value)),))))

    def with_date_range(self, date_range: Any) -> "FilterState":
        return replace(self, date_range=DateRange(date_range or DateRange.ALL))

    def with_stock(self, stock: Any) -> "FilterState":
        return replace(self, stock=StockFilter(stock or StockFilter.ALL))

    def reset(self) -> "FilterState":
        return FilterState()

    @property
    def is_active(self) -> bool:
        return bool(
            self.search.strip()
            or self.equals
            or self.date_range != DateRange.ALL
            or self.stock != StockFilter.ALL
        )


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and value.strip().lower() in ("", ALL))


def search_predicate(term: str, fields: Iterable[str]) -> Predicate:
    needle = term.strip().lower()
    fields = tuple(fields)

    def predicate(record: Any) -> bool:
        for field in fields:
            value = get_field(record, field)
            if value is not None and needle in str(value).lower():
                return True
        return False

    return predicate


def equals_predicate(field: str, expected: str) -> Predicate:
    def predicate(record: Any) -> bool:
        value = get_field(record, field)
        if value is None:
            return False
        if isinstance(value, Enum):
            value = value.value
        return str(value) == expected

    return predicate


def date_range_predicate(field: str, date_range: DateRange, today: date) -> Predicate:
    if date_range == DateRange.TODAY:
        return lambda record: to_date(get_field(record, field)) == today

    # 含今天共 N 天
    start = today - timedelta(days=DATE_RANGE_DAYS[date_range] - 1)

    def predicate(record: Any) -> bool:
        value = to_date(get_field(record, field))
        return value is not None and value >= start

    return predicate


def stock_predicate(quantity_field: str, min_stock_field: str, stock: StockFilter) -> Predicate:
    def predicate(record: Any) -> bool:
        quantity = coerce_number(get_field(record, quantity_field))
        min_stock = coerce_number(get_field(record, min_stock_field))
        if stock == StockFilter.LOW:
            return quantity <= min_stock
        if stock == StockFilter.OUT:
            return quantity == 0
        return quantity > min_stock

    return predicate


def build_predicates(state: FilterState, spec: FilterSpec, today: Optional[date] = None) -> List[Predicate]:
    """把筛选状态转换为谓词列表，资源不支持的条件会被忽略"""
    predicates: List[Predicate] = []
    if state.search.strip() and spec.search_fields:
        predicates.append(search_predicate(state.search, spec.search_fields))
    for field, value in state.equals:
        predicates.append(equals_predicate(field, value))
    if state.date_range != DateRange.ALL and spec.date_field:
        predicates.append(date_range_predicate(spec.date_field, state.date_range, today or date.today()))
    if state.stock != StockFilter.ALL and spec.supports_stock:
        predicates.append(stock_predicate(spec.quantity_field, spec.min_stock_field, state.stock))
    return predicates


def apply_filters(
    records: Iterable[Any],
    state: FilterState,
    spec: FilterSpec,
    today: Optional[date] = None,
) -> List[Any]:
    predicates = build_predicates(state, spec, today)
    return [record for record in records if all(p(record) for p in predicates)]
