"""Blackjack round engine with state machine."""

import functools
import logging
from decimal import Decimal, InvalidOperation
from random import Random
from typing import Any, Callable, TypeVar

from pydantic import ValidationError
from transitions import Machine

from bjpractice.cards import Card
from bjpractice.game.events import EventEmitter, EventType, GameEvent
from bjpractice.game.state import GamePhase, ResultType
from bjpractice.hand import Hand, Outcome, compare_hands
from bjpractice.persistence import GamePersistence
from bjpractice.settings import TableSettings, UnknownSettingError
from bjpractice.shoe import Shoe
from bjpractice.statistics import GameStats
from bjpractice.strategy import Action, DeviationInfo, deviation_for, recommend, should_take_insurance
from config import TimingConfig, config

logger = logging.getLogger(__name__)

F = TypeVar("F", bound=Callable[..., bool])

Pacer = Callable[[float], None]

# Changing these resets the shoe or its count
SHOE_REBUILD_SETTINGS = ("deck_count", "counting_system")


def _to_amount(amount: Any) -> Decimal | None:
    """Convert a chip amount to Decimal, or None if it is not a finite number."""
    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return None
    return value if value.is_finite() else None


def _exclusive(method: F) -> F:
    """Reject an action issued while another action is still running."""

    @functools.wraps(method)
    def wrapper(self: "BlackjackGame", *args: Any, **kwargs: Any) -> bool:
        if self._busy:
            return self._reject(method.__name__, "another action is in progress")
        self._busy = True
        try:
            return method(self, *args, **kwargs)
        finally:
            self._busy = False

    return wrapper  # type: ignore[return-value]


class BlackjackGame:
    """
    Blackjack round engine using a state machine.

    Owns the shoe, the dealer hand, the player hands, balance, settings and
    statistics. Every action returns ``True`` if it was carried out and
    ``False`` (with an ``INVALID_ACTION`` event) if it was not legal; no
    action raises as part of normal play. Collaborators observe the game
    through ``subscribe``.
    """

    # State machine states
    STATES = [phase.value for phase in GamePhase]

    # State machine transitions
    TRANSITIONS = [
        {"trigger": "begin_dealing", "source": "betting", "dest": "dealing"},
        {"trigger": "offer_insurance", "source": "dealing", "dest": "insurance"},
        {"trigger": "begin_player_turn", "source": ["dealing", "insurance"], "dest": "player_turn"},
        {"trigger": "begin_dealer_turn", "source": "player_turn", "dest": "dealer_turn"},
        {
            "trigger": "begin_payout",
            "source": ["dealing", "insurance", "player_turn", "dealer_turn"],
            "dest": "payout",
        },
        {"trigger": "finish_round", "source": "payout", "dest": "game_over"},
        {"trigger": "reset_round", "source": "game_over", "dest": "betting"},
    ]

    def __init__(
        self,
        settings: TableSettings | None = None,
        initial_balance: Decimal | int | None = None,
        rng: Random | None = None,
        persistence: GamePersistence | None = None,
        pacer: Pacer | None = None,
        timing: TimingConfig | None = None,
    ) -> None:
        """
        Initialize a new blackjack game.

        Args:
            settings: Table rules. When omitted, saved settings are used if
                there are any, otherwise the defaults
            initial_balance: Starting balance (a saved balance takes precedence)
            rng: Random number generator for reproducible shuffles
            persistence: Where balance, settings and statistics are kept
            pacer: Called with a delay in seconds at each presentation pause
            timing: Pacing delays (defaults from configuration)
        """
        self.settings = settings or TableSettings()
        if initial_balance is None:
            initial_balance = config.game.default_balance
        self.balance = Decimal(str(initial_balance))
        self.stats = GameStats()
        self.events = EventEmitter()

        self.player_hands: list[Hand] = [Hand()]
        self.dealer_hand = Hand()
        self.current_hand_index = 0
        self.current_bet = Decimal("0")

        self._persistence = persistence
        self._pacer = pacer
        self._timing = timing or config.timing
        self._busy = False
        self._round_net = Decimal("0")

        self._load_persisted_state(keep_settings=settings is not None)

        self.shoe = Shoe(
            deck_count=self.settings.deck_count,
            penetration=self.settings.penetration,
            counting_system=self.settings.counting_system,
            rng=rng,
        )
        self.shoe.shuffle()

        # Initialize state machine
        self.machine = Machine(
            model=self,
            states=self.STATES,
            transitions=self.TRANSITIONS,
            initial=GamePhase.BETTING.value,
            auto_transitions=False,
            model_attribute="_machine_state",
            after_state_change="_notify_phase_change",
        )

    @property
    def phase(self) -> GamePhase:
        """Get the current phase as enum."""
        return GamePhase(self._machine_state)  # type: ignore[attr-defined]

    @property
    def current_hand(self) -> Hand | None:
        """Get the hand currently being played."""
        if 0 <= self.current_hand_index < len(self.player_hands):
            return self.player_hands[self.current_hand_index]
        return None

    def subscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> None:
        """Subscribe to game events."""
        self.events.subscribe(handler, event_type)

    def unsubscribe(
        self,
        handler: Callable[[GameEvent], None],
        event_type: EventType | None = None,
    ) -> bool:
        return self.events.unsubscribe(handler, event_type)

    # Betting

    @_exclusive
    def place_bet(self, amount: Decimal | int) -> bool:
        """
        Place the per-hand stake for the next round.

        The stake is taken for each of ``settings.num_hands`` starting hands.

        Returns:
            True if bet was accepted
        """
        if self.phase != GamePhase.BETTING:
            return self._reject("place_bet", f"cannot bet during {self.phase}")
        if self.current_bet > 0:
            return self._reject("place_bet", "bet already placed")

        stake = _to_amount(amount)
        if stake is None:
            return self._reject("place_bet", f"invalid amount {amount!r}")
        if stake < self.settings.min_bet or stake > self.settings.max_bet:
            return self._reject(
                "place_bet",
                f"bet must be between {self.settings.min_bet} and {self.settings.max_bet}",
            )

        total = stake * self.settings.num_hands
        if total > self.balance:
            return self._reject("place_bet", "insufficient funds")

        self.balance -= total
        self.current_bet = stake
        self.player_hands = [Hand(bet=stake) for _ in range(self.settings.num_hands)]
        self.current_hand_index = 0
        self.stats.total_wagered += total

        self.events.emit_new(EventType.BET_PLACED, amount=stake, hands=self.settings.num_hands)
        self._notify_balance_change()
        self._save_balance()
        return True

    @_exclusive
    def clear_bet(self) -> bool:
        """Take back a bet that has not been dealt yet."""
        if self.phase != GamePhase.BETTING or self.current_bet == 0:
            return self._reject("clear_bet", "no bet to clear")

        total = sum((hand.bet for hand in self.player_hands), Decimal("0"))
        self.balance += total
        self.stats.total_wagered -= total
        self.current_bet = Decimal("0")
        self.player_hands = [Hand()]

        self._notify_balance_change()
        self._save_balance()
        return True

    # Dealing

    @_exclusive
    def deal(self) -> bool:
        """Deal the opening cards for a placed bet."""
        if self.phase != GamePhase.BETTING:
            return self._reject("deal", f"cannot deal during {self.phase}")
        if self.current_bet == 0:
            return self._reject("deal", "no bet placed")

        if self.shoe.needs_reshuffle:
            self.shoe.reshuffle()
            self.events.emit_new(EventType.SHOE_RESHUFFLED, cards=self.shoe.cards_remaining)

        self.begin_dealing()

        self.player_hands = [Hand(bet=self.current_bet) for _ in self.player_hands]
        self.dealer_hand.clear()
        self.current_hand_index = 0
        self._round_net = Decimal("0")

        # Deal: player(s), dealer, player(s), dealer (hole card)
        for hand in self.player_hands:
            self._deal_card_to(hand)
        self._deal_card_to(self.dealer_hand)
        for hand in self.player_hands:
            self._deal_card_to(hand)
        self._deal_card_to(self.dealer_hand, face_up=not self.settings.dealer_hole_card)

        if self.dealer_hand.cards[0].is_ace and self.settings.insurance_allowed:
            self.offer_insurance()
            self.events.emit_new(EventType.INSURANCE_OFFERED, cost=self.insurance_cost)
            return True

        if self._has_single_natural():
            self._resolve_hands()
            return True

        self._enter_player_turn()
        return True

    @_exclusive
    def handle_insurance_decision(self, take: bool) -> bool:
        """
        Take or decline insurance, then reveal the hole card.

        Insurance costs half of each starting stake and pays 2:1 when the
        dealer has blackjack. If the player cannot afford it, it is declined.
        """
        if self.phase != GamePhase.INSURANCE:
            return self._reject("handle_insurance_decision", "no insurance offered")

        if take:
            cost = self.insurance_cost
            if cost <= self.balance:
                self.balance -= cost
                for hand in self.player_hands:
                    hand.insurance_bet = hand.bet / 2
                self._notify_balance_change()
            else:
                logger.debug("Insurance of %s not affordable, declined", cost)

        self._reveal_hole_card()
        dealer_blackjack = self.dealer_hand.is_blackjack
        self._settle_insurance(dealer_blackjack)

        if dealer_blackjack or self._has_single_natural():
            self._resolve_hands()
            return True

        self._enter_player_turn()
        return True

    # Player actions

    @_exclusive
    def hit(self) -> bool:
        """Take another card on the current hand."""
        hand = self._playable_hand()
        if hand is None:
            return self._reject("hit", "cannot hit now")

        self._deal_card_to(hand)

        if hand.is_busted:
            self._complete_hand()
        elif hand.value == 21 and self.settings.auto_stand_on_21:
            hand.is_stood = True
            self._complete_hand()
        return True

    @_exclusive
    def stand(self) -> bool:
        """Keep the current hand."""
        hand = self._playable_hand()
        if hand is None:
            return self._reject("stand", "cannot stand now")

        hand.is_stood = True
        self._complete_hand()
        return True

    @_exclusive
    def double(self) -> bool:
        """Double the stake, take exactly one card, and stand."""
        hand = self._playable_hand()
        if hand is None or not self.can_double:
            return self._reject("double", "cannot double now")

        additional = hand.bet
        self.balance -= additional
        hand.bet += additional
        hand.is_doubled = True
        self.stats.total_wagered += additional
        self._notify_balance_change()

        self._deal_card_to(hand)
        hand.is_stood = True
        self._complete_hand()
        return True

    @_exclusive
    def split(self) -> bool:
        """
        Split a pair into two hands with matching stakes.

        The new hand is inserted right after the current one and receives its
        second card when play reaches it.
        """
        hand = self._playable_hand()
        if hand is None or not self.can_split:
            return self._reject("split", "cannot split now")

        self.balance -= hand.bet
        self.stats.total_wagered += hand.bet

        new_hand = Hand(bet=hand.bet, is_split=True)
        new_hand.add_card(hand.cards.pop())
        hand.is_split = True
        self.player_hands.insert(self.current_hand_index + 1, new_hand)

        self._deal_card_to(hand)
        self._notify_balance_change()
        return True

    @_exclusive
    def surrender(self) -> bool:
        """Give up the current hand and take back half its stake."""
        hand = self._playable_hand()
        if hand is None or not self.can_surrender:
            return self._reject("surrender", "cannot surrender now")

        hand.is_surrendered = True
        self.balance += hand.bet / 2
        self._notify_balance_change()

        self._complete_hand()
        return True

    # Round management

    @_exclusive
    def new_round(self) -> bool:
        """Clear the finished round and return to betting."""
        if self.phase != GamePhase.GAME_OVER:
            return self._reject("new_round", "round still in progress")

        self.player_hands = [Hand()]
        self.dealer_hand.clear()
        self.current_hand_index = 0
        self.current_bet = Decimal("0")
        self.reset_round()
        return True

    @_exclusive
    def reshuffle(self) -> bool:
        """Shuffle the discards back into the shoe between rounds."""
        if self.phase not in (GamePhase.BETTING, GamePhase.GAME_OVER):
            return self._reject("reshuffle", "cannot reshuffle during a round")

        self.shoe.reshuffle()
        self.events.emit_new(EventType.SHOE_RESHUFFLED, cards=self.shoe.cards_remaining)
        self._notify_count()
        return True

    @_exclusive
    def add_funds(self, amount: Decimal | int) -> bool:
        """Add chips to the balance."""
        funds = _to_amount(amount)
        if funds is None:
            return self._reject("add_funds", f"invalid amount {amount!r}")
        if funds <= 0 or funds > config.game.max_funds_per_deposit:
            return self._reject(
                "add_funds",
                f"amount must be between 1 and {config.game.max_funds_per_deposit}",
            )

        self.balance += funds
        self._notify_balance_change()
        self._save_balance()
        return True

    @_exclusive
    def update_settings(self, **changes: Any) -> bool:
        """
        Apply setting changes field by field.

        Unknown fields or values of the wrong type reject the whole update.
        Deck count, penetration and counting system changes reach the shoe
        immediately; a new deck count rebuilds and reshuffles it. Deck count
        and counting system can only change between rounds.
        """
        if any(name in changes for name in SHOE_REBUILD_SETTINGS) and self.phase not in (
            GamePhase.BETTING,
            GamePhase.GAME_OVER,
        ):
            return self._reject("update_settings", "cannot change the shoe during a round")

        try:
            updated = self.settings.merged(changes)
        except UnknownSettingError as exc:
            return self._reject("update_settings", f"unknown setting {exc.args[0]!r}")
        except ValidationError as exc:
            logger.warning("Rejected settings update %s: %s", changes, exc)
            return self._reject("update_settings", "invalid setting value")

        self.settings = updated
        if "deck_count" in changes:
            self.shoe.set_deck_count(updated.deck_count)
        if "penetration" in changes:
            self.shoe.set_penetration(updated.penetration)
        if "counting_system" in changes:
            self.shoe.set_counting_system(updated.counting_system)

        self._save_settings()
        return True

    def reset_statistics(self) -> None:
        """Zero every statistic."""
        self.stats = GameStats()
        self._save_stats()

    # Action checks

    @property
    def can_hit(self) -> bool:
        """Check if hitting is allowed."""
        return self._playable_hand() is not None

    @property
    def can_stand(self) -> bool:
        """Check if standing is allowed."""
        return self.can_hit

    @property
    def can_double(self) -> bool:
        """Check if doubling is allowed."""
        hand = self._playable_hand()
        if hand is None:
            return False
        if not hand.can_double():
            return False
        if hand.is_split and not self.settings.double_after_split:
            return False
        return hand.bet <= self.balance

    @property
    def can_split(self) -> bool:
        """Check if splitting is allowed."""
        hand = self._playable_hand()
        if hand is None:
            return False
        if not hand.can_split:
            return False
        if len(self.player_hands) >= config.game.max_hands:
            return False
        if hand.cards[0].is_ace and hand.is_split and not self.settings.resplit_aces:
            return False
        return hand.bet <= self.balance

    @property
    def can_surrender(self) -> bool:
        """Check if surrender is allowed (untouched two-card hand only)."""
        hand = self._playable_hand()
        if hand is None or not self.settings.surrender_allowed:
            return False
        return len(hand.cards) == 2 and not hand.is_split and not hand.is_doubled

    @property
    def can_take_insurance(self) -> bool:
        """Check if insurance is on offer and affordable."""
        return self.phase == GamePhase.INSURANCE and self.insurance_cost <= self.balance

    @property
    def insurance_cost(self) -> Decimal:
        """Half of every starting stake."""
        return sum((hand.bet / 2 for hand in self.player_hands), Decimal("0"))

    # Advice

    def strategy_hint(self) -> Action | None:
        """Recommend an action for the current hand, or None outside the player's turn."""
        hand = self.current_hand
        if self.phase != GamePhase.PLAYER_TURN or hand is None:
            return None

        true_count = self.shoe.true_count if self.settings.counting_enabled else None
        return recommend(
            hand,
            self.dealer_hand.cards[0],
            can_double=self.can_double,
            can_split=self.can_split,
            can_surrender=self.can_surrender,
            true_count=true_count,
        )

    def deviation_info(self) -> DeviationInfo:
        """Explain the count deviation that applies to the current hand, if any."""
        hand = self.current_hand
        if self.phase != GamePhase.PLAYER_TURN or hand is None:
            return DeviationInfo(is_deviation=False)
        if not self.settings.counting_enabled:
            return DeviationInfo(is_deviation=False)
        return deviation_for(hand, self.dealer_hand.cards[0], self.shoe.true_count)

    def insurance_hint(self) -> bool | None:
        """Whether the count says to insure; None unless insurance is offered with counting on."""
        if self.phase != GamePhase.INSURANCE or not self.settings.counting_enabled:
            return None
        return should_take_insurance(self.shoe.true_count)

    # Shoe queries

    @property
    def shoe_remaining(self) -> int:
        return self.shoe.cards_remaining

    @property
    def shoe_total(self) -> int:
        return self.shoe.total_cards

    @property
    def running_count(self) -> int:
        return self.shoe.running_count

    @property
    def true_count(self) -> int:
        return self.shoe.true_count

    # Round internals

    def _playable_hand(self) -> Hand | None:
        """Return the hand awaiting a decision, or None outside the player's turn."""
        if self.phase != GamePhase.PLAYER_TURN:
            return None
        hand = self.current_hand
        if hand is None or hand.is_finished:
            return None
        return hand

    def _has_single_natural(self) -> bool:
        return len(self.player_hands) == 1 and self.player_hands[0].is_blackjack

    def _deal_card_to(self, hand: Hand, face_up: bool = True) -> Card:
        """Deal a card to a hand, counting it if it lands face-up."""
        if self.shoe.cards_remaining == 0:
            logger.warning("Shoe ran out mid-round, reshuffling the discards")
            self.shoe.reshuffle(in_play=self._cards_on_table())
            self.events.emit_new(EventType.SHOE_RESHUFFLED, cards=self.shoe.cards_remaining)

        card = self.shoe.deal()
        card.face_up = face_up
        hand.add_card(card)

        if face_up:
            self.shoe.update_count(card)
            self._notify_count()

        self.events.emit_new(
            EventType.CARD_DEALT,
            card=card,
            hand=hand,
            hand_index=self._index_of(hand),
            is_dealer=hand is self.dealer_hand,
            is_reveal=False,
        )
        self._pause(self._timing.card_deal_delay)
        return card

    def _reveal_hole_card(self) -> None:
        """Turn the dealer's hole card face-up and count it, once."""
        if len(self.dealer_hand.cards) < 2:
            return
        hole_card = self.dealer_hand.cards[1]
        if hole_card.face_up:
            return

        hole_card.face_up = True
        self.shoe.update_count(hole_card)
        self._notify_count()
        self.events.emit_new(
            EventType.CARD_DEALT,
            card=hole_card,
            hand=self.dealer_hand,
            hand_index=None,
            is_dealer=True,
            is_reveal=True,
        )

    def _cards_on_table(self) -> list[Card]:
        cards = list(self.dealer_hand.cards)
        for hand in self.player_hands:
            cards.extend(hand.cards)
        return cards

    def _index_of(self, hand: Hand) -> int | None:
        for index, candidate in enumerate(self.player_hands):
            if candidate is hand:
                return index
        return None

    def _enter_player_turn(self) -> None:
        self.begin_player_turn()
        hand = self.current_hand
        if hand is not None and hand.is_blackjack:
            # Several starting hands: a natural needs no decisions
            hand.is_stood = True
            self._complete_hand()

    def _complete_hand(self) -> None:
        """Move to the next hand that still needs play, or to the dealer."""
        while self.current_hand_index < len(self.player_hands) - 1:
            self.current_hand_index += 1
            hand = self.player_hands[self.current_hand_index]

            if len(hand.cards) == 1:
                # Created by a split, gets its second card now
                self._deal_card_to(hand)

            if hand.is_blackjack:
                hand.is_stood = True
                continue
            return

        self._play_dealer()

    def _play_dealer(self) -> None:
        """Dealer reveals and draws, then hands are paid."""
        if all(h.is_busted or h.is_surrendered or h.is_blackjack for h in self.player_hands):
            # Nothing left to compare against a drawn total
            self._resolve_hands()
            return

        self.begin_dealer_turn()
        self._reveal_hole_card()

        while self.should_dealer_hit():
            self._pause(self._timing.dealer_turn_delay)
            self._deal_card_to(self.dealer_hand)

        self._resolve_hands()

    def should_dealer_hit(self) -> bool:
        """Dealer hits below 17, and on soft 17 under H17 rules."""
        value = self.dealer_hand.value
        if value < 17:
            return True
        if value == 17 and self.dealer_hand.is_soft and self.settings.dealer_hits_soft_17:
            return True
        return False

    def _settle_insurance(self, dealer_blackjack: bool) -> None:
        """Pay or collect insurance stakes as soon as the hole card is known."""
        for index, hand in enumerate(self.player_hands):
            stake = hand.insurance_bet
            if stake <= 0:
                continue
            if dealer_blackjack:
                # Stake back plus 2:1
                self.balance += stake * (1 + config.game.insurance_payout)
                net = stake * config.game.insurance_payout
                result = ResultType.WIN
            else:
                net = -stake
                result = ResultType.LOSE

            self.stats.net_profit += net
            self._round_net += net
            self.events.emit_new(
                EventType.HAND_RESOLVED,
                result=result,
                amount=net,
                hand_index=index,
                insurance=True,
                overall=False,
            )

        if dealer_blackjack and any(hand.insurance_bet > 0 for hand in self.player_hands):
            self._notify_balance_change()

    def _settle_hand(self, hand: Hand) -> tuple[ResultType, Decimal, Decimal]:
        """
        Settle one hand against the dealer.

        Returns:
            (result, amount returned to the balance now, signed net for the hand)
        """
        bet = hand.bet

        if hand.is_surrendered:
            # Half the stake was returned when the hand was surrendered
            self.stats.hands_surrendered += 1
            return ResultType.SURRENDER, Decimal("0"), -(bet / 2)

        if hand.is_busted:
            self.stats.hands_lost += 1
            return ResultType.LOSE, Decimal("0"), -bet

        if hand.is_blackjack:
            if self.dealer_hand.is_blackjack:
                self.stats.hands_pushed += 1
                return ResultType.PUSH, bet, Decimal("0")
            winnings = bet * Decimal(str(self.settings.blackjack_payout))
            self.stats.hands_won += 1
            self.stats.blackjacks += 1
            return ResultType.BLACKJACK, bet + winnings, winnings

        outcome = compare_hands(hand, self.dealer_hand)
        if outcome == Outcome.WIN:
            self.stats.hands_won += 1
            return ResultType.WIN, bet * 2, bet
        if outcome == Outcome.LOSE:
            self.stats.hands_lost += 1
            return ResultType.LOSE, Decimal("0"), -bet
        self.stats.hands_pushed += 1
        return ResultType.PUSH, bet, Decimal("0")

    def _resolve_hands(self) -> None:
        """Pay every player hand, update statistics, and end the round."""
        self._reveal_hole_card()
        self.begin_payout()

        for index, hand in enumerate(self.player_hands):
            result, payout, net = self._settle_hand(hand)
            self.balance += payout
            self.stats.hands_played += 1
            self.stats.net_profit += net
            self._round_net += net
            self.events.emit_new(
                EventType.HAND_RESOLVED,
                result=result,
                amount=net,
                hand_index=index,
                insurance=False,
                overall=False,
            )

        if self._round_net > 0:
            overall = ResultType.WIN
        elif self._round_net < 0:
            overall = ResultType.LOSE
        else:
            overall = ResultType.PUSH

        logger.info(
            "Round over: dealer %s, %s %s, balance %s",
            self.dealer_hand.value,
            overall.value,
            self._round_net,
            self.balance,
        )

        self._notify_balance_change()
        self.events.emit_new(
            EventType.HAND_RESOLVED,
            result=overall,
            amount=self._round_net,
            hand_index=None,
            insurance=False,
            overall=True,
        )
        self._save_balance()
        self._save_stats()
        self.finish_round()

    # Notifications

    def _reject(self, action: str, reason: str) -> bool:
        logger.debug("Rejected %s: %s", action, reason)
        self.events.emit_new(EventType.INVALID_ACTION, action=action, reason=reason)
        return False

    def _notify_phase_change(self) -> None:
        self.events.emit_new(EventType.PHASE_CHANGED, phase=self.phase)

    def _notify_balance_change(self) -> None:
        self.events.emit_new(EventType.BALANCE_CHANGED, balance=self.balance)

    def _notify_count(self) -> None:
        if self.settings.counting_enabled:
            self.events.emit_new(
                EventType.COUNT_UPDATED,
                running_count=self.shoe.running_count,
                true_count=self.shoe.true_count,
            )

    def _pause(self, seconds: float) -> None:
        if self._pacer is not None and seconds > 0:
            self._pacer(seconds)

    # Persistence

    def persisted_state(self) -> dict[str, Any]:
        """Return everything worth keeping between sessions."""
        return {
            "balance": self.balance,
            "settings": self.settings,
            "stats": self.stats,
        }

    def save_all(self) -> None:
        self._save_balance()
        self._save_settings()
        self._save_stats()

    def _load_persisted_state(self, keep_settings: bool = False) -> None:
        if self._persistence is None:
            return

        balance = self._persistence.load_balance()
        if balance is not None:
            self.balance = balance
        if keep_settings:
            self._persistence.save_settings(self.settings)
        else:
            settings = self._persistence.load_settings()
            if settings is not None:
                self.settings = settings
        stats = self._persistence.load_stats()
        if stats is not None:
            self.stats = stats
        self._persistence.refresh_all()

    def _save_balance(self) -> None:
        if self._persistence is not None:
            self._persistence.save_balance(self.balance)

    def _save_settings(self) -> None:
        if self._persistence is not None:
            self._persistence.save_settings(self.settings)

    def _save_stats(self) -> None:
        if self._persistence is not None:
            self._persistence.save_stats(self.stats)
