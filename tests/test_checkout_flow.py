"""Tests for the checkout step state machine."""

from storefront.domain.checkout import STEP_ORDER, CheckoutFlow, CheckoutState, PaymentMethod, Step

flow = CheckoutFlow()


def at_payment(method=None) -> CheckoutState:
    return CheckoutState(
        active_step=Step.PAYMENT,
        completed_steps=frozenset({Step.CART, Step.SHIPPING}),
        selected_payment_method=method,
    )


class TestCanEnter:
    def test_cart_is_always_enterable(self):
        assert flow.can_enter(CheckoutState(), Step.CART)

    def test_shipping_requires_cart(self):
        assert not flow.can_enter(CheckoutState(), Step.SHIPPING)
        state = CheckoutState(completed_steps=frozenset({Step.CART}))
        assert flow.can_enter(state, Step.SHIPPING)

    def test_payment_requires_shipping(self):
        state = CheckoutState(completed_steps=frozenset({Step.CART}))
        assert not flow.can_enter(state, Step.PAYMENT)
        assert flow.can_enter(at_payment(), Step.PAYMENT)

    def test_payment_not_enterable_from_skipped_prefix(self):
        state = CheckoutState(completed_steps=frozenset({Step.SHIPPING}))
        assert not flow.can_enter(state, Step.PAYMENT)

    def test_summary_requires_payment_method(self):
        state = CheckoutState(
            active_step=Step.SUMMARY,
            completed_steps=frozenset({Step.CART, Step.SHIPPING, Step.PAYMENT}),
        )
        assert not flow.can_enter(state, Step.SUMMARY)

    def test_summary_requires_whole_prefix(self):
        state = CheckoutState(
            active_step=Step.SUMMARY,
            completed_steps=frozenset({Step.CART, Step.PAYMENT}),
            selected_payment_method=PaymentMethod.CASH,
        )
        assert not flow.can_enter(state, Step.SUMMARY)


class TestAdvance:
    def test_advance_from_cart(self):
        result = flow.advance(CheckoutState(), Step.CART)
        assert result.accepted
        assert result.state.active_step == Step.SHIPPING
        assert Step.CART in result.state.completed_steps

    def test_advance_is_idempotent_on_completion(self):
        state = flow.advance(CheckoutState(), Step.CART).state
        again = flow.advance(state.model_copy(update={"active_step": Step.CART}), Step.CART).state
        assert again.completed_steps == frozenset({Step.CART})

    def test_cannot_skip_a_step(self):
        result = flow.advance(CheckoutState(), Step.SHIPPING)
        assert not result.accepted
        assert result.state == CheckoutState()

    def test_payment_without_method_is_rejected(self):
        state = at_payment()
        result = flow.advance(state, Step.PAYMENT)
        assert not result.accepted
        assert result.state.active_step == Step.PAYMENT
        assert Step.PAYMENT not in result.state.completed_steps

    def test_payment_with_method_moves_to_summary(self):
        result = flow.advance(at_payment(PaymentMethod.CASH), Step.PAYMENT)
        assert result.accepted
        assert result.state.active_step == Step.SUMMARY
        assert Step.PAYMENT in result.state.completed_steps

    def test_full_walk(self):
        state = CheckoutState()
        state = flow.advance(state, Step.CART).state
        state = flow.advance(state, Step.SHIPPING).state
        state = flow.select_payment(state, PaymentMethod.CARD).state
        state = flow.advance(state, Step.PAYMENT).state
        assert state.active_step == Step.SUMMARY
        assert flow.can_enter(state, Step.SUMMARY)


class TestGoBack:
    def test_back_from_payment_revokes_and_clears_method(self):
        state = at_payment(PaymentMethod.CARD).model_copy(
            update={"completed_steps": frozenset({Step.CART, Step.SHIPPING, Step.PAYMENT})}
        )
        result = flow.go_back(state, Step.PAYMENT)
        assert result.state.active_step == Step.SHIPPING
        assert Step.PAYMENT not in result.state.completed_steps
        assert result.state.selected_payment_method is None
        assert {Step.CART, Step.SHIPPING} <= result.state.completed_steps

    def test_back_from_shipping_revokes_shipping_only(self):
        state = CheckoutState(
            active_step=Step.SHIPPING,
            completed_steps=frozenset({Step.CART, Step.SHIPPING}),
        )
        result = flow.go_back(state, Step.SHIPPING)
        assert result.state.active_step == Step.CART
        assert result.state.completed_steps == frozenset({Step.CART})

    def test_back_from_cart_is_rejected(self):
        result = flow.go_back(CheckoutState(), Step.CART)
        assert not result.accepted

    def test_back_from_inactive_step_is_rejected(self):
        state = CheckoutState(
            active_step=Step.SUMMARY,
            completed_steps=frozenset({Step.CART, Step.SHIPPING, Step.PAYMENT}),
            selected_payment_method=PaymentMethod.CASH,
        )
        result = flow.go_back(state, Step.SHIPPING)
        assert not result.accepted
        assert result.state == state
        assert flow.can_enter(result.state, Step.SUMMARY)

    def test_back_revokes_later_completed_steps(self):
        # shipping aktywny po activate, payment wciaz ukonczony
        state = CheckoutState(
            active_step=Step.SHIPPING,
            completed_steps=frozenset({Step.CART, Step.SHIPPING, Step.PAYMENT}),
            selected_payment_method=PaymentMethod.CARD,
        )
        result = flow.go_back(state, Step.SHIPPING)
        assert result.accepted
        assert result.state.completed_steps == frozenset({Step.CART})
        assert result.state.selected_payment_method is None
        assert not flow.can_enter(result.state, Step.SUMMARY)

    def test_completed_steps_stay_a_prefix(self):
        state = CheckoutState()
        moves = [
            ("advance", Step.CART),
            ("advance", Step.SHIPPING),
            ("select", PaymentMethod.CASH),
            ("advance", Step.PAYMENT),
            ("back", Step.SHIPPING),
            ("back", Step.SUMMARY),
            ("back", Step.PAYMENT),
            ("back", Step.CART),
            ("back", Step.SHIPPING),
        ]
        for action, arg in moves:
            if action == "advance":
                state = flow.advance(state, arg).state
            elif action == "select":
                state = flow.select_payment(state, arg).state
            else:
                state = flow.go_back(state, arg).state
            done = [step for step in STEP_ORDER if step in state.completed_steps]
            assert done == list(STEP_ORDER[: len(done)])

        assert state.active_step == Step.CART
        assert state.completed_steps == frozenset({Step.CART})


class TestPaymentAndEdit:
    def test_select_payment_does_not_advance(self):
        result = flow.select_payment(at_payment(), PaymentMethod.CASH)
        assert result.state.selected_payment_method == PaymentMethod.CASH
        assert result.state.active_step == Step.PAYMENT

    def test_edit_order_returns_to_payment_keeping_completion(self):
        summary = flow.advance(at_payment(PaymentMethod.CASH), Step.PAYMENT).state
        result = flow.edit_order(summary)
        assert result.accepted
        assert result.state.active_step == Step.PAYMENT
        assert result.state.completed_steps == summary.completed_steps
        assert result.state.selected_payment_method == PaymentMethod.CASH

    def test_edit_outside_summary_is_rejected(self):
        assert not flow.edit_order(at_payment()).accepted

    def test_activate_respects_gating(self):
        assert not flow.activate(CheckoutState(), Step.PAYMENT).accepted
        assert flow.activate(at_payment(), Step.SHIPPING).state.active_step == Step.SHIPPING
