from fastapi import APIRouter, Query

from storefront.domain import shipping
from storefront.domain.schemas import ShippingEstimateOut
from storefront.domain.shipping import City

router = APIRouter(prefix="/shipping", tags=["shipping"])


@router.get("/estimate", response_model=ShippingEstimateOut)
def get_estimate(city: City = Query(...)):
    estimate = shipping.estimate(city)
    return ShippingEstimateOut(
        city=city,
        zone=shipping.zone_for(city),
        min_days=estimate.min_days,
        max_days=estimate.max_days,
        rate=estimate.rate,
    )
