"""
Fixed Lookup Tables
===================
Enumerated values referenced by items and shipping addresses.

Each table reserves id 1 for the "---" placeholder shown as the default
option of a select box; a saved record never points at it.
"""

from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple


PLACEHOLDER_ID = 1


@dataclass(frozen=True)
class LookupValue:
    """One selectable value"""
    id: int
    name: str


class LookupTable:
    """Read-only id -> name table"""

    def __init__(self, name: str, names: Tuple[str, ...]):
        self.name = name
        self._values: Dict[int, LookupValue] = {
            index: LookupValue(index, label)
            for index, label in enumerate(names, start=PLACEHOLDER_ID)
        }

    def all(self) -> List[LookupValue]:
        return list(self._values.values())

    def find(self, value_id) -> Optional[LookupValue]:
        try:
            return self._values.get(int(value_id))
        except (TypeError, ValueError):
            return None

    def label(self, value_id) -> str:
        value = self.find(value_id)
        return value.name if value else ""

    def is_selectable(self, value_id) -> bool:
        """True for any known id other than the placeholder"""
        value = self.find(value_id)
        return value is not None and value.id != PLACEHOLDER_ID

    def __len__(self):
        return len(self._values)


Category = LookupTable("category", (
    "---",
    "レディース",
    "メンズ",
    "ベビー・キッズ",
    "インテリア・住まい・小物",
    "本・音楽・ゲーム",
    "おもちゃ・ホビー・グッズ",
    "家電・スマホ・カメラ",
    "スポーツ・レジャー",
    "ハンドメイド",
    "その他",
))

SalesStatus = LookupTable("sales_status", (
    "---",
    "新品、未使用",
    "未使用に近い",
    "目立った傷や汚れなし",
    "やや傷や汚れあり",
    "傷や汚れあり",
    "全体的に状態が悪い",
))

ShippingFeeStatus = LookupTable("shipping_fee_status", (
    "---",
    "着払い(購入者負担)",
    "送料込み(出品者負担)",
))

Prefecture = LookupTable("prefecture", (
    "---",
    "北海道", "青森県", "岩手県", "宮城県", "秋田県", "山形県", "福島県",
    "茨城県", "栃木県", "群馬県", "埼玉県", "千葉県", "東京都", "神奈川県",
    "新潟県", "富山県", "石川県", "福井県", "山梨県", "長野県",
    "岐阜県", "静岡県", "愛知県", "三重県",
    "滋賀県", "京都府", "大阪府", "兵庫県", "奈良県", "和歌山県",
    "鳥取県", "島根県", "岡山県", "広島県", "山口県",
    "徳島県", "香川県", "愛媛県", "高知県",
    "福岡県", "佐賀県", "長崎県", "熊本県", "大分県", "宮崎県", "鹿児島県",
    "沖縄県",
))

ScheduledDelivery = LookupTable("scheduled_delivery", (
    "---",
    "1~2日で発送",
    "2~3日で発送",
    "4~7日で発送",
))


# Item column -> lookup table
ITEM_LOOKUPS: Dict[str, LookupTable] = {
    "category_id": Category,
    "sales_status_id": SalesStatus,
    "shipping_fee_status_id": ShippingFeeStatus,
    "prefecture_id": Prefecture,
    "scheduled_delivery_id": ScheduledDelivery,
}
