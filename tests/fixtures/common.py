"""
Common test fixtures shared by all modules.

Provides factory functions for the core vesting migration structures:
- VestingWindow
- MerkleTree over windows
- MigrationEngine wired to an in-memory ledger and balance bridge

Addresses are all-digit so their checksum form equals their lowercase form.
"""

from typing import Optional, Sequence

from core.balances.bridge import InMemoryBalanceBridge
from core.clock import FrozenClock
from core.ledger.ledger import MigrationLedger
from core.ledger.store import InMemoryLedgerStore, LedgerStore
from core.merkle.leaf import window_leaf
from core.merkle.merkle_tree import MerkleTree
from core.schemas.window import VestingWindow
from engine.migration_engine import MigrationEngine
from engine.permissions import RolePermissions


ALICE = "0x1111111111111111111111111111111111111111"
BOB = "0x2222222222222222222222222222222222222222"
CAROL = "0x3333333333333333333333333333333333333333"
ADMIN = "0x4444444444444444444444444444444444444444"

TOKEN = 10**18
DAY = 86_400
TWO_YEARS = 730 * DAY
T0 = 1_767_225_600


# =============================================================================
# VestingWindow Factories
# =============================================================================

def make_window(
    account: str = ALICE,
    total_amount: int = 100 * TOKEN,
    window_start: int = T0,
    window_end: Optional[int] = None,
) -> VestingWindow:
    """
    Create a VestingWindow for testing.

    Defaults to 100 tokens vesting linearly over two years from T0.
    """
    return VestingWindow(
        account=account,
        total_amount=total_amount,
        window_start=window_start,
        window_end=window_start + TWO_YEARS if window_end is None else window_end,
    )


def make_windows(count: int = 4) -> list[VestingWindow]:
    """Distinct windows across three accounts, with staggered amounts."""
    accounts = [ALICE, BOB, CAROL]
    return [
        make_window(
            account=accounts[i % len(accounts)],
            total_amount=(i + 1) * 10 * TOKEN,
            window_start=T0 + i * DAY,
        )
        for i in range(count)
    ]


def make_tree(windows: Sequence[VestingWindow]) -> MerkleTree:
    return MerkleTree.build([window_leaf(w) for w in windows])


# =============================================================================
# Engine Factory
# =============================================================================

def make_engine(
    windows: Sequence[VestingWindow],
    *,
    clock: Optional[FrozenClock] = None,
    store: Optional[LedgerStore] = None,
    permissions: Optional[RolePermissions] = None,
    fund: bool = True,
    publish_as: Optional[str] = None,
) -> tuple[MigrationEngine, InMemoryBalanceBridge, MerkleTree]:
    """
    Wire an engine over `windows` and publish their root.

    With `fund`, every window owner receives input balance equal to the
    window total so transfers never fail for lack of funds.
    """
    tree = make_tree(windows)
    bridge = InMemoryBalanceBridge()
    if fund:
        for window in windows:
            bridge.mint_input(window.account, window.total_amount)

    engine = MigrationEngine(
        MigrationLedger(store or InMemoryLedgerStore()),
        bridge,
        clock=clock or FrozenClock(T0),
        permissions=permissions,
    )
    engine.set_vesting_window_merkle_root(tree.root, sender=publish_as)
    return engine, bridge, tree
