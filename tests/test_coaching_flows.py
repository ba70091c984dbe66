import json

import pytest

from services.coaching_flows import generate_coaching_message, generate_daily_coach_message
from services.daily_collector import collect_daily_message_data
from services.generation_client import RateLimitExceeded
from services.weekly_collector import collect_weekly_data


@pytest.mark.asyncio
async def test_weekly_end_to_end(seeded_store, make_client, sleeper):
    weekly_data = await collect_weekly_data("u1", "2024-01-01", store=seeded_store)
    reply = json.dumps({"subject": "Solid foundations", "body": "Hi Sam,\n\n## Food Diary Feedback\nGood."})
    client, generator = make_client([reply])

    message = await generate_coaching_message(
        weekly_data, coach_name="Coach Kai", coach_persona="A calm ex-rower.", client=client
    )

    assert message.subject == "Solid foundations"
    assert "## Food Diary Feedback" in message.body
    prompt = generator.prompts[0]
    assert "- Training Adherence: 3/5 days (60%)" in prompt
    assert "Adopt the persona of Coach Kai" in prompt
    assert sleeper.delays == []


@pytest.mark.asyncio
async def test_weekly_retries_then_parses(seeded_store, make_client, sleeper):
    weekly_data = await collect_weekly_data("u1", "2024-01-01", store=seeded_store)
    client, generator = make_client([Exception("rate limit reached"), "# Keep it up\n\nGreat week."])

    message = await generate_coaching_message(weekly_data, client=client)

    assert generator.calls == 2
    assert sleeper.delays == [2.0]
    assert message.subject == "Keep it up"


@pytest.mark.asyncio
async def test_weekly_rate_limit_surfaces(seeded_store, make_client):
    weekly_data = await collect_weekly_data("u1", "2024-01-01", store=seeded_store)
    client, _ = make_client([Exception("429")] * 3)

    with pytest.raises(RateLimitExceeded):
        await generate_coaching_message(weekly_data, client=client)


@pytest.mark.asyncio
async def test_daily_end_to_end(seeded_store, make_client):
    daily_data = await collect_daily_message_data("u1", "2024-01-03", store=seeded_store)
    client, generator = make_client(["  Day three, Sam. Two sessions done.  "])

    message = await generate_daily_coach_message(
        daily_data, coach_name="Coach Kai", custom_intensity_overrides={"High": "Speak in haiku."},
        client=client,
    )

    assert message == "Day three, Sam. Two sessions done."
    assert "Speak in haiku." in generator.prompts[0]
    assert "Today is day 3 of 7" in generator.prompts[0]
