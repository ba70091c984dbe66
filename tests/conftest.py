import copy
from typing import Any, Dict, Iterable, List, Optional, Union

import pytest

from services.generation_client import GenerationClient, GenerationResult, RetryPolicy


class FakeAPIError(Exception):
    """Service error carrying an HTTP status like the provider SDKs do."""

    def __init__(self, message: str, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


def _matches(document: Dict[str, Any], predicates: Dict[str, Any]) -> bool:
    for field, expected in predicates.items():
        value = document.get(field)
        if isinstance(expected, dict):
            if "$gte" in expected and (value is None or value < expected["$gte"]):
                return False
            if "$lte" in expected and (value is None or value > expected["$lte"]):
                return False
        elif value != expected:
            return False
    return True


class FakeRecordStore:
    """In-memory RecordStore with injectable per-collection or per-document failures."""

    def __init__(self) -> None:
        self.collections: Dict[str, Dict[str, Dict[str, Any]]] = {}
        self.failing: set = set()
        self.get_calls: List[tuple] = []
        self.query_calls: List[tuple] = []
        self.saved: Dict[tuple, Dict[str, Any]] = {}

    def put(self, collection: str, doc_id: str, **fields: Any) -> None:
        self.collections.setdefault(collection, {})[doc_id] = fields

    def fail(self, collection: str, doc_id: Optional[str] = None) -> None:
        self.failing.add((collection, doc_id))

    def _check(self, collection: str, doc_id: Optional[str] = None) -> None:
        if (collection, None) in self.failing or (collection, doc_id) in self.failing:
            raise ConnectionError(f"store unavailable for {collection}/{doc_id}")

    async def get_doc(self, collection: str, doc_id: str) -> Optional[Dict[str, Any]]:
        self.get_calls.append((collection, doc_id))
        self._check(collection, doc_id)
        document = self.collections.get(collection, {}).get(doc_id)
        if document is None:
            return None
        return {**copy.deepcopy(document), "id": doc_id}

    async def query_docs(self, collection: str, predicates: Dict[str, Any]) -> List[Dict[str, Any]]:
        self.query_calls.append((collection, dict(predicates)))
        self._check(collection)
        return [
            {**copy.deepcopy(document), "id": doc_id}
            for doc_id, document in self.collections.get(collection, {}).items()
            if _matches(document, predicates)
        ]

    async def set_doc(self, collection: str, doc_id: str, data: Dict[str, Any]) -> None:
        self.saved[(collection, doc_id)] = dict(data)
        self.collections.setdefault(collection, {})[doc_id] = dict(data)


Outcome = Union[str, BaseException]


class FakeTextGenerator:
    """Scripted text service: each call consumes the next outcome (text or exception)."""

    def __init__(self, outcomes: Iterable[Outcome]) -> None:
        self.outcomes = list(outcomes)
        self.prompts: List[str] = []

    async def generate(self, prompt: str) -> GenerationResult:
        self.prompts.append(prompt)
        if not self.outcomes:
            raise AssertionError("FakeTextGenerator called more times than scripted")
        outcome = self.outcomes.pop(0)
        if isinstance(outcome, BaseException):
            raise outcome
        return GenerationResult(text=outcome)

    @property
    def calls(self) -> int:
        return len(self.prompts)


class SleepRecorder:
    def __init__(self) -> None:
        self.delays: List[float] = []

    async def __call__(self, delay: float) -> None:
        self.delays.append(delay)


@pytest.fixture
def store() -> FakeRecordStore:
    return FakeRecordStore()


@pytest.fixture
def sleeper() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def make_client(sleeper):
    def _make(outcomes: Iterable[Outcome], max_attempts: int = 3, base_delay: float = 2.0,
              api_key_configured: bool = True):
        generator = FakeTextGenerator(outcomes)
        client = GenerationClient(
            generator,
            policy=RetryPolicy(max_attempts=max_attempts, base_delay=base_delay),
            api_key_configured=api_key_configured,
            sleep=sleeper,
        )
        return client, generator

    return _make


def seed_week(store: FakeRecordStore, user_id: str = "u1") -> None:
    """A week starting Monday 2024-01-01: five checkins (three trained), partial logs."""
    store.put(
        "users", user_id,
        name="Sam",
        goals={
            "goal_type": "Lose Weight",
            "calorie_limit": 2000,
            "protein_goal": 150,
            "carb_goal": 200,
            "fat_goal": 60,
            "workout_sessions_per_week": 4,
            "cardio_sessions_per_week": 2,
            "water_goal": 3,
            "starting_weight": 82,
        },
        experience_level="Beginner",
        coach_intensity="High",
        coach_id="coach-1",
    )
    store.put("coaches", "coach-1", coach_name="Coach Kai", coach_persona="A calm ex-rower.")
    store.put(
        "weekly_checkins", f"{user_id}_2024-01-01",
        average_weight=80.5,
        average_steps=8000,
        average_sleep=7.2,
        workout_goal_achieved=False,
        cardio_goal_achieved=True,
        appetite="Steady",
        hardest_part="Friday dinner",
    )
    trained = {"2024-01-01": True, "2024-01-02": False, "2024-01-03": True, "2024-01-04": True,
               "2024-01-05": False}
    for day, did_train in trained.items():
        store.put(
            "daily_checkins", f"{user_id}_{day}",
            current_weight=80.0, step_count=9000, sleep_hours=7, trained_today=did_train,
            cardio_today=False, calorie_goal_met=True,
        )
    store.put("food_diary", f"{user_id}_2024-01-01", total_calories=1900, total_protein=140,
              total_carbs=180, total_fat=55)
    store.put("food_diary", f"{user_id}_2024-01-03", total_calories=2300, total_protein=120,
              total_carbs=250, total_fat=70)
    store.put("water_log", f"{user_id}_2024-01-02", total_ml=2500)
    store.put("workout_logs", "w1", user_id=user_id, date="2024-01-01", routine_name="Upper A",
              status="completed")
    store.put("workout_logs", "w2", user_id=user_id, date="2024-01-03", routine_name="Lower A",
              status="completed")
    store.put("workout_logs", "w3", user_id=user_id, date="2024-01-04", routine_name="Upper B",
              status="in_progress")
    store.put("cardio_log", "c1", user_id=user_id, date="2024-01-02", name="Bike", time=30,
              calories=250, avg_heart_rate=135)


@pytest.fixture
def seeded_store(store) -> FakeRecordStore:
    seed_week(store)
    return store
