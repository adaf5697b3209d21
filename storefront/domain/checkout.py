# storefront/domain/checkout.py
"""
Maszyna stanow checkoutu: cart -> shipping -> payment -> summary.

Stan trzyma klient (nic tu nie jest zapisywane w bazie), serwer tylko liczy
nastepny stan. Jedyna operacja ktora przekracza granice persystencji to
zlozenie zamowienia, a ono i tak waliduje wszystko od nowa.
"""
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class Step(str, Enum):
    CART = "cart"
    SHIPPING = "shipping"
    PAYMENT = "payment"
    SUMMARY = "summary"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"


# kroki ktore mozna "ukonczyc"; summary jest terminalny
STEP_ORDER = (Step.CART, Step.SHIPPING, Step.PAYMENT)


class CheckoutState(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    active_step: Step = Step.CART
    completed_steps: frozenset[Step] = Field(default_factory=frozenset)
    selected_payment_method: PaymentMethod | None = None


class Transition(BaseModel):
    """Wynik przejscia: nowy stan + czy przejscie zostalo przyjete."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    accepted: bool
    state: CheckoutState


def _previous(step: Step) -> Step | None:
    if step == Step.SUMMARY:
        return Step.PAYMENT
    index = STEP_ORDER.index(step)
    return STEP_ORDER[index - 1] if index > 0 else None


def _next(step: Step) -> Step:
    index = STEP_ORDER.index(step)
    if index == len(STEP_ORDER) - 1:
        return Step.SUMMARY
    return STEP_ORDER[index + 1]


class CheckoutFlow:
    def can_enter(self, state: CheckoutState, step: Step) -> bool:
        if step == Step.CART:
            return True
        previous = _previous(step)
        if previous not in state.completed_steps:
            return False
        if step == Step.SUMMARY and state.selected_payment_method is None:
            return False
        return self.can_enter(state, previous)

    def advance(self, state: CheckoutState, from_step: Step) -> Transition:
        if from_step == Step.SUMMARY or not self.can_enter(state, from_step):
            return Transition(accepted=False, state=state)

        if from_step == Step.PAYMENT and state.selected_payment_method is None:
            return Transition(accepted=False, state=state)

        new_state = state.model_copy(
            update={
                "completed_steps": state.completed_steps | {from_step},
                "active_step": _next(from_step),
            }
        )
        return Transition(accepted=True, state=new_state)

    def go_back(self, state: CheckoutState, from_step: Step) -> Transition:
        if from_step == Step.SUMMARY:
            return self.edit_order(state)

        previous = _previous(from_step)
        if previous is None or from_step != state.active_step:
            return Transition(accepted=False, state=state)

        # cofamy krok i wszystko za nim, completed_steps zostaje prefiksem
        revoked = set(STEP_ORDER[STEP_ORDER.index(from_step):])
        update = {
            "active_step": previous,
            "completed_steps": state.completed_steps - revoked,
        }
        if Step.PAYMENT in revoked:
            update["selected_payment_method"] = None

        return Transition(accepted=True, state=state.model_copy(update=update))

    def select_payment(self, state: CheckoutState, method: PaymentMethod) -> Transition:
        new_state = state.model_copy(update={"selected_payment_method": PaymentMethod(method)})
        return Transition(accepted=True, state=new_state)

    def edit_order(self, state: CheckoutState) -> Transition:
        # powrot z podsumowania do platnosci, shipping nie wymaga ponownego potwierdzenia
        if state.active_step != Step.SUMMARY:
            return Transition(accepted=False, state=state)
        return Transition(accepted=True, state=state.model_copy(update={"active_step": Step.PAYMENT}))

    def activate(self, state: CheckoutState, step: Step) -> Transition:
        if not self.can_enter(state, step):
            return Transition(accepted=False, state=state)
        return Transition(accepted=True, state=state.model_copy(update={"active_step": step}))
