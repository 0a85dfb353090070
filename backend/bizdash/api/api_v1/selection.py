"""
关联选择补全

选择了商品/客户/供应商时，用被选记录补全名称等字段：
- 本次请求修改了选择、但没有同时传入该字段 → 用被选记录的值
- 字段为空 → 用被选记录的值
调用方显式传入的值优先。
"""

from typing import Any, Dict, Optional, Set

from bizdash.api.api_v1.crud import ResourceContext
from bizdash.services.calculations import coerce_number


def _blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def should_fill(data: Dict[str, Any], provided: Set[str], ref_field: str, target: str) -> bool:
    if _blank(data.get(target)):
        return True
    return ref_field in provided and target not in provided


async def load_selected(ctx: ResourceContext, model: Any, label: str, record_id: Optional[int]) -> Optional[Any]:
    """被选记录必须属于当前用户，否则 404"""
    if record_id is None:
        return None
    return await ctx.repository(model, label).get(record_id)


def fill_name(
    data: Dict[str, Any],
    provided: Set[str],
    ref_field: str,
    target: str,
    selected: Optional[Any],
    source: str = "name",
) -> None:
    if selected is not None and should_fill(data, provided, ref_field, target):
        data[target] = getattr(selected, source)


def fill_price(data: Dict[str, Any], provided: Set[str], ref_field: str, selected: Optional[Any]) -> None:
    """选择商品时带出商品单价（单价未填写或不大于 0 时）"""
    if selected is None:
        return
    if coerce_number(data.get("price")) <= 0 or (ref_field in provided and "price" not in provided):
        data["price"] = selected.price
