from typing import Dict, Optional

from sqlalchemy.orm import selectinload
from strawberry.types import Info

from relay_bundle.api.graphql.relay import ConnectionSpec, FieldSpec, RelayType
from relay_bundle.api.graphql.resolvers import BaseResolver
from relay_bundle.db.models.store import Store as StoreModel


class StoreResolver(BaseResolver[StoreModel]):
    model_class = StoreModel
    type_name = "Store"


def resolve_product_count(store: StoreModel, args, info) -> int:
    return len(store.products)


class StoreType(RelayType):
    name = "Store"
    description = "A shop connected to the platform."
    model = StoreModel

    def relay_fields(self) -> Dict[str, FieldSpec]:
        return {
            "shop_domain": FieldSpec(str),
            "platform": FieldSpec(str),
            "currency": FieldSpec(str, "ISO 4217 currency code."),
            "is_active": FieldSpec(bool),
            "product_count": FieldSpec(int, resolve=resolve_product_count),
        }

    def connections(self) -> Dict[str, ConnectionSpec]:
        return {
            "products": ConnectionSpec(type="product", description="Products sold in the store."),
        }

    def get_identifier(self, obj: StoreModel) -> str:
        return str(obj.id)

    async def resolve_by_id(self, id: str, info: Optional[Info] = None) -> StoreModel:
        # Products are loaded up front, the connection pages them in memory
        db = StoreResolver.get_db_from_info(info)
        return await StoreResolver.get_by_id(id, db, selectinload(StoreModel.products))
