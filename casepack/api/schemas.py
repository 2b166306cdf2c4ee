from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from casepack.logic.models import CasePack, OptimizationResult


class SizeRatioModel(BaseModel):
    qty: int


class CasePackModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    packs: int = 1
    size_ratios: List[SizeRatioModel] = Field(default_factory=list, alias="sizeRatios")

    def to_domain(self) -> CasePack:
        return CasePack.from_ratios([r.qty for r in self.size_ratios], packs=self.packs)

    @classmethod
    def from_domain(cls, case_pack: CasePack) -> "CasePackModel":
        return cls(
            packs=case_pack.packs,
            size_ratios=[SizeRatioModel(qty=q) for q in case_pack.size_ratios],
        )


class OptimizeRequest(BaseModel):
    """
    Optimization request. Missing fields pass validation and are reported
    by the optimizer as HTTP 400.
    Negative needs and supplies are valid input.
    """
    model_config = ConfigDict(populate_by_name=True)

    case_packs: Optional[List[CasePackModel]] = Field(default=None, alias="casePacks")
    need_per_store: Optional[Dict[str, int]] = Field(default=None, alias="needPerStore")
    warehouse_available_qty: Optional[Dict[str, int]] = Field(default=None, alias="warehouseAvailableQty")

    def domain_case_packs(self) -> Optional[List[CasePack]]:
        if self.case_packs is None:
            return None
        return [cp.to_domain() for cp in self.case_packs]


class OptimizeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    case_packs: List[CasePackModel] = Field(alias="casePacks")
    stores: Dict[str, int]
    warehouses: Dict[str, int]
    remaining_supply: int = Field(alias="remainingSupply")

    @classmethod
    def from_result(cls, result: OptimizationResult) -> "OptimizeResponse":
        return cls(
            case_packs=[CasePackModel.from_domain(cp) for cp in result.case_packs],
            stores=result.stores,
            warehouses=result.warehouses,
            remaining_supply=result.remaining_supply,
        )


class ErrorResponse(BaseModel):
    detail: str
    error: str
