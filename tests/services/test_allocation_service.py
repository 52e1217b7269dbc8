import pytest

from cashsplit.core.errors import PreconditionViolation
from cashsplit.models.participant import Participant, Tab
from cashsplit.models.receipt import ReceiptLedger
from cashsplit.services.allocation_service import AllocationService


def _tab(ledger, *prices):
    tab = Tab(ledger=ledger)
    for i, price in enumerate(prices):
        tab.add_item(f"item {i}", 1.0, price)
    return tab


def test_burger_and_fries_split(burger_ledger):
    burger = _tab(burger_ledger, 10.0)
    fries = _tab(burger_ledger, 5.0)

    assert AllocationService.allocate(burger) == pytest.approx(13.0)
    assert AllocationService.allocate(fries) == pytest.approx(6.5)


def test_everything_claimed_sums_to_total_plus_tip(burger_ledger):
    whole = _tab(burger_ledger, 10.0, 5.0)

    assert AllocationService.allocate(whole) == pytest.approx(19.5)


def test_no_claimed_items_owes_nothing(burger_ledger):
    assert AllocationService.allocate(Tab(ledger=burger_ledger)) == 0.0


@pytest.mark.parametrize("field", ["subtotal", "tax", "total"])
def test_invalid_ledger_is_rejected(burger_ledger, field):
    ledger = burger_ledger.model_copy(update={field: 0.0})

    with pytest.raises(PreconditionViolation):
        AllocationService.allocate(_tab(ledger, 10.0))


def test_zero_subtotal_never_divides():
    ledger = ReceiptLedger(subtotal=0.0, tax=1.0, total=1.0, tip=0.0)

    with pytest.raises(PreconditionViolation):
        AllocationService.allocate(_tab(ledger, 10.0))


def test_zero_tip_is_valid(burger_ledger):
    ledger = burger_ledger.model_copy(update={"tip": 0.0})

    assert AllocationService.allocate(_tab(ledger, 10.0)) == pytest.approx(11.0)


def test_share_ratio_is_scale_invariant(burger_ledger):
    doubled = burger_ledger.model_copy(update={"subtotal": 30.0})

    original = AllocationService.allocate(_tab(burger_ledger, 10.0))
    scaled = AllocationService.allocate(_tab(doubled, 20.0))

    assert scaled == pytest.approx(original)


def test_owed_scales_with_total_and_tip(burger_ledger):
    doubled = ReceiptLedger(subtotal=30.0, tax=3.0, total=33.0, tip=6.0)

    original = AllocationService.allocate(_tab(burger_ledger, 10.0))
    scaled = AllocationService.allocate(_tab(doubled, 20.0))

    assert scaled == pytest.approx(2 * original)


def test_negative_price_is_accepted(burger_ledger):
    # a discount line claimed by someone reduces their share
    assert AllocationService.allocate(_tab(burger_ledger, 10.0, -5.0)) == pytest.approx(6.5)


def test_allocate_all(burger_ledger):
    alice = Participant(name="Alice", tab=_tab(burger_ledger, 10.0))
    bob = Participant(name="Bob", tab=_tab(burger_ledger, 5.0))
    carol = Participant(name="Carol")

    owed = AllocationService.allocate_all([alice, bob, carol])

    assert owed[alice.id] == pytest.approx(13.0)
    assert owed[bob.id] == pytest.approx(6.5)
    assert owed[carol.id] == 0.0


def test_unclaimed_items_leave_a_residual(burger_ledger):
    alice = Participant(name="Alice", tab=_tab(burger_ledger, 10.0))

    owed = AllocationService.allocate_all([alice])

    assert AllocationService.unallocated_amount(burger_ledger, owed) == pytest.approx(6.5)
