from pydantic import BaseModel, ConfigDict


class InventoryHistoryRead(BaseModel):
    id: int
    product_id: int
    old_quantity: int
    new_quantity: int
    change_date: str
    changed_by: str

    model_config = ConfigDict(from_attributes=True)
