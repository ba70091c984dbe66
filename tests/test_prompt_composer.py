import pytest

from prompts import EXPERIENCE_INSTRUCTIONS, INTENSITY_INSTRUCTIONS, WEEKLY_SECTIONS
from schemas import (
    CoachIntensity,
    CoachingMessage,
    CurrentWeekProgress,
    DailyCheckin,
    DailyMessageData,
    ExperienceLevel,
    FoodDiary,
    GoalProgression,
    UserProfile,
    WeeklyCheckin,
    WeeklyData,
    WorkoutLog,
)
from services.prompt_composer import (
    compose_daily_prompt,
    compose_weekly_prompt,
    format_daily_data,
    format_weekly_data,
    intensity_instruction,
)


def _profile(**overrides):
    data = {
        "name": "Sam",
        "goals": {"goal_type": "Gain Strength", "calorie_limit": 2000, "protein_goal": 150,
                  "workout_sessions_per_week": 8},
        "experience_level": "Advanced",
        "coach_intensity": "Low",
    }
    data.update(overrides)
    return UserProfile.model_validate(data)


def _week(**overrides):
    data = {
        "user_id": "u1",
        "week_start_date": "2024-01-01",
        "weekly_checkin": WeeklyCheckin(week_start_date="2024-01-01", appetite="Hungry at night"),
        "user_profile": _profile(),
    }
    data.update(overrides)
    return WeeklyData(**data)


def _checkins(trained):
    return [
        DailyCheckin(date=f"2024-01-0{i}", trained_today=flag, current_weight=80 + i)
        for i, flag in enumerate(trained, start=1)
    ]


def test_adherence_counts_and_rounds():
    data = _week(daily_checkins=_checkins([True, False, True, True, False]))

    report = format_weekly_data(data)

    assert "- Training Adherence: 3/5 days (60%)" in report
    assert "DAILY CHECKINS (5 days logged):" in report


def test_percentages_round_half_up():
    data = _week(workout_logs=[WorkoutLog(date="2024-01-01", status="completed")])

    report = format_weekly_data(data)

    # 1 of 8 sessions is exactly 12.5%
    assert "- Goal Achievement: 13%" in report


def test_food_deviation_and_range():
    data = _week(food_diaries=[
        FoodDiary(date="2024-01-01", total_calories=1900, total_protein=140),
        FoodDiary(date="2024-01-03", total_calories=2300, total_protein=120),
    ])

    report = format_weekly_data(data)

    assert "2024-01-01: 1900 cal (-5.0% vs goal)" in report
    assert "2024-01-03: 2300 cal (+15.0% vs goal)" in report
    assert "- Days Within 10% of Calorie Goal: 1/2 (50%)" in report


def test_empty_sections_are_labelled():
    report = format_weekly_data(_week())

    for label in ("DAILY CHECKINS", "FOOD DIARIES", "WORKOUT LOGS", "CARDIO LOGS", "WATER LOGS"):
        assert f"{label}: none logged this week" in report
    assert "- Appetite: Hungry at night" in report


def test_unset_goals_render_not_set():
    data = _week(user_profile=_profile(goals={}))

    report = format_weekly_data(data)

    assert "- Calorie Limit: Not set" in report
    assert "- Goal Type: Not specified" in report


def test_weekly_prompt_lists_sections_in_order():
    prompt = compose_weekly_prompt(_week(), coach_name="Coach Kai")

    positions = [prompt.index(f"## {header}") for header, _, _ in WEEKLY_SECTIONS]
    assert positions == sorted(positions)
    assert "## Water Intake Feedback (75-125 words minimum)" in prompt
    assert '{"subject": "<short subject line>", "body": "<the full message>"}' in prompt
    assert 'You are the AI Coach "Coach Kai"' in prompt


def test_weekly_prompt_uses_profile_levels():
    prompt = compose_weekly_prompt(_week())

    assert EXPERIENCE_INSTRUCTIONS[ExperienceLevel.ADVANCED] in prompt
    assert INTENSITY_INSTRUCTIONS[CoachIntensity.LOW] in prompt
    assert 'primary goal is "Gain Strength"' in prompt


def test_missing_levels_use_defaults():
    prompt = compose_weekly_prompt(_week(user_profile=None))

    assert EXPERIENCE_INSTRUCTIONS[ExperienceLevel.INTERMEDIATE] in prompt
    assert INTENSITY_INSTRUCTIONS[CoachIntensity.MEDIUM] in prompt
    assert "USER PROFILE: not available" in prompt


def test_unknown_enum_values_fall_back_to_defaults():
    profile = _profile(experience_level="Guru", coach_intensity="Nuclear")

    prompt = compose_weekly_prompt(_week(user_profile=profile))

    assert EXPERIENCE_INSTRUCTIONS[ExperienceLevel.INTERMEDIATE] in prompt
    assert INTENSITY_INSTRUCTIONS[CoachIntensity.MEDIUM] in prompt


def test_persona_only_when_given():
    with_persona = compose_weekly_prompt(_week(), coach_name="Coach Kai", coach_persona="A calm ex-rower.")
    without = compose_weekly_prompt(_week(), coach_name="Coach Kai", coach_persona="   ")

    assert "Adopt the persona of Coach Kai. A calm ex-rower." in with_persona
    assert "Adopt the persona" not in without


def test_previous_message_adds_continuity():
    data = _week(previous_message=CoachingMessage(subject="Push week", body="Commit to 4 sessions."))

    prompt = compose_weekly_prompt(data)

    assert "Subject: Push week" in prompt
    assert "Commit to 4 sessions." in prompt
    assert "CONTINUITY" not in compose_weekly_prompt(_week())


@pytest.mark.parametrize("key", ["Low", CoachIntensity.LOW])
def test_custom_intensity_replaces_canned_text(key):
    text = intensity_instruction(CoachIntensity.LOW, {key: "Talk like a pirate."})

    assert text == "Talk like a pirate."


def test_blank_custom_intensity_is_ignored():
    text = intensity_instruction(CoachIntensity.HIGH, {"High": "  ", "Low": "Other level"})

    assert text == INTENSITY_INSTRUCTIONS[CoachIntensity.HIGH]


def test_override_does_not_leak_canned_text_into_prompt():
    prompt = compose_weekly_prompt(_week(), custom_intensity_overrides={"Low": "Be a pirate."})

    assert "Be a pirate." in prompt
    assert INTENSITY_INSTRUCTIONS[CoachIntensity.LOW] not in prompt


def _daily(**overrides):
    data = {
        "user_id": "u1",
        "date": "2024-01-03",
        "week_start_date": "2024-01-01",
        "current_week_progress": CurrentWeekProgress(
            daily_checkins=_checkins([True, False, True]),
            food_diaries=[FoodDiary(date="2024-01-01", total_calories=2100, total_protein=130)],
            days_into_week=3,
        ),
        "user_profile": _profile(),
        "goal_progression": GoalProgression(calorie_progress=1.05, protein_progress=130 / 150),
    }
    data.update(overrides)
    return DailyMessageData(**data)


def test_daily_report_has_progression_lines():
    report = format_daily_data(_daily())

    assert "day 3 of 7" in report
    assert "- Average daily calories: 2100 of 2000 goal (105%)" in report
    assert "- Average daily protein: 130.0g of 150g goal (87%)" in report
    assert "- Training Adherence: 2/3 days (67%)" in report
    assert "LAST WEEK'S CHECKIN: not submitted" in report


def test_daily_prompt_is_plain_text_contract():
    prompt = compose_daily_prompt(_daily(), coach_name="Coach Kai", coach_persona="A calm ex-rower.")

    assert "Today is day 3 of 7" in prompt
    assert "No JSON" in prompt
    assert "Adopt the persona of Coach Kai" in prompt
    assert "## Food Diary Feedback" not in prompt
