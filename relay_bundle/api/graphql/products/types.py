from typing import Dict, Optional

from strawberry.types import Info

from relay_bundle.api.graphql.relay import FieldSpec, RelayType
from relay_bundle.api.graphql.resolvers import BaseResolver
from relay_bundle.db.models.product import Product as ProductModel


class ProductResolver(BaseResolver[ProductModel]):
    model_class = ProductModel
    type_name = "Product"


class ProductType(RelayType):
    name = "Product"
    description = "A product sold in a store."
    model = ProductModel

    def relay_fields(self) -> Dict[str, FieldSpec]:
        return {
            "title": FieldSpec(str),
            "vendor": FieldSpec(Optional[str]),
            "product_type": FieldSpec(Optional[str], "Category assigned by the platform."),
        }

    def get_identifier(self, obj: ProductModel) -> str:
        return str(obj.id)

    async def resolve_by_id(self, id: str, info: Optional[Info] = None) -> ProductModel:
        db = ProductResolver.get_db_from_info(info)
        return await ProductResolver.get_by_id(id, db)
