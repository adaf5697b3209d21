# storefront/api/routers/checkout.py
from fastapi import APIRouter

from storefront.domain.checkout import CheckoutFlow, Transition
from storefront.domain.schemas import CanEnterOut, PaymentSelectIn, StateIn, StepIn

router = APIRouter(prefix="/checkout", tags=["checkout"])

# stan checkoutu trzyma klient, tu tylko liczymy przejscia
flow = CheckoutFlow()


@router.post("/can-enter", response_model=CanEnterOut)
def can_enter(payload: StepIn):
    return CanEnterOut(step=payload.current_step, can_enter=flow.can_enter(payload.state, payload.current_step))


@router.post("/advance", response_model=Transition)
def advance(payload: StepIn):
    return flow.advance(payload.state, payload.current_step)


@router.post("/back", response_model=Transition)
def go_back(payload: StepIn):
    return flow.go_back(payload.state, payload.current_step)


@router.post("/payment", response_model=Transition)
def select_payment(payload: PaymentSelectIn):
    return flow.select_payment(payload.state, payload.method)


@router.post("/edit", response_model=Transition)
def edit_order(payload: StateIn):
    return flow.edit_order(payload.state)
