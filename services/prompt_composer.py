"""Builds the weekly and daily coaching prompts from aggregated data.

Everything here is a pure string transform: no I/O, no clock, no randomness.
"""

import math
from typing import List, Mapping, Optional, Union

from prompts.coach_tone_prompt import (
    CONTINUITY_INSTRUCTION,
    DEFAULT_COACH_INTENSITY,
    DEFAULT_EXPERIENCE_LEVEL,
    EXPERIENCE_INSTRUCTIONS,
    INTENSITY_INSTRUCTIONS,
    PERSONA_INSTRUCTION,
)
from prompts.daily_coach_prompt import DAILY_COACH_PROMPT
from prompts.weekly_coach_prompt import WEEKLY_COACH_PROMPT, render_section_instructions
from schemas import (
    CoachIntensity,
    CoachingMessage,
    DailyMessageData,
    ExperienceLevel,
    SessionStatus,
    UserProfile,
    WeeklyCheckin,
    WeeklyData,
)

IntensityOverrides = Mapping[Union[str, CoachIntensity], Optional[str]]

NOT_SET = "Not set"


# ---------------------------
# Number formatting helpers
# ---------------------------

def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percent(part: float, whole: float) -> int:
    """part / whole as a whole-number percentage, rounded half up."""
    return _round_half_up(part / whole * 100)


def _num(value: Optional[float]) -> str:
    return f"{value:g}"


def _goal(value: Optional[float], unit: str = "") -> str:
    """Goal value with unit, or 'Not set' when missing or zero."""
    if not value:
        return NOT_SET
    return f"{_num(value)}{unit}"


def _or_na(value, unit: str = "") -> str:
    if value is None or value == "":
        return "N/A"
    if isinstance(value, bool):
        return "Yes" if value else "No"
    if isinstance(value, float):
        return f"{_num(value)}{unit}"
    return f"{value}{unit}"


def _deviation(actual: float, goal: Optional[float]) -> str:
    """Signed percentage deviation from goal with one decimal place."""
    if not goal:
        return "N/A"
    return f"{(actual - goal) / goal * 100:+.1f}%"


def _avg(values: List[float]) -> float:
    return sum(values) / len(values)


# ---------------------------
# Instruction selection
# ---------------------------

def experience_instruction(level: Optional[ExperienceLevel]) -> str:
    """Canned explanation-depth instructions for an experience level."""
    return EXPERIENCE_INSTRUCTIONS[level or DEFAULT_EXPERIENCE_LEVEL]


def intensity_instruction(
    level: Optional[CoachIntensity],
    custom_overrides: Optional[IntensityOverrides] = None,
) -> str:
    """Tone instructions for an intensity level.

    A non-empty custom override for the active level replaces the canned
    text entirely.
    """
    level = level or DEFAULT_COACH_INTENSITY
    if custom_overrides:
        override = custom_overrides.get(level.value) or custom_overrides.get(level)
        if isinstance(override, str) and override.strip():
            return override
    return INTENSITY_INSTRUCTIONS[level]


def _preamble(
    coach_name: str,
    coach_persona: str,
    previous_message: Optional[CoachingMessage] = None,
) -> str:
    parts = []
    if coach_persona and coach_persona.strip():
        parts.append(PERSONA_INSTRUCTION.format(coach_name=coach_name, coach_persona=coach_persona.strip()))
    if previous_message is not None:
        parts.append(CONTINUITY_INSTRUCTION.format(subject=previous_message.subject, body=previous_message.body))
    return "".join(f"\n\n{part}" for part in parts)


def _goal_type(profile: Optional[UserProfile]) -> str:
    if profile and profile.goals.goal_type:
        return profile.goals.goal_type.value
    return "Not specified"


# ---------------------------
# Report sections
# ---------------------------

def _profile_section(profile: Optional[UserProfile]) -> List[str]:
    if profile is None:
        return ["USER PROFILE: not available", ""]
    goals = profile.goals
    return [
        "USER PROFILE:",
        f"- Name: {profile.name or 'Not provided'}",
        f"- Goal Type: {_goal_type(profile)}",
        f"- Experience Level: {(profile.experience_level or DEFAULT_EXPERIENCE_LEVEL).value}",
        f"- Calorie Limit: {_goal(goals.calorie_limit)}",
        f"- Protein Goal: {_goal(goals.protein_goal, 'g')}",
        f"- Carb Goal: {_goal(goals.carb_goal, 'g')}",
        f"- Fat Goal: {_goal(goals.fat_goal, 'g')}",
        f"- Workout Sessions Goal: {_goal(goals.workout_sessions_per_week)} per week",
        f"- Cardio Sessions Goal: {_goal(goals.cardio_sessions_per_week)} per week",
        f"- Water Goal: {_goal(goals.water_goal, 'L')} per day",
        f"- Starting Weight: {_goal(goals.starting_weight, 'kg')}",
        "",
    ]


def _weekly_checkin_section(checkin: Optional[WeeklyCheckin], title: str) -> List[str]:
    if checkin is None:
        return [f"{title}: not submitted", ""]
    lines = [
        f"{title}:",
        f"- Average Weight: {_or_na(checkin.average_weight, 'kg')}",
        f"- Average Steps: {_or_na(checkin.average_steps)}",
        f"- Average Sleep: {_or_na(checkin.average_sleep, ' hours')}",
        f"- Workout Goal Achieved: {_or_na(checkin.workout_goal_achieved)}",
        f"- Cardio Goal Achieved: {_or_na(checkin.cardio_goal_achieved)}",
    ]
    reflections = (
        ("Appetite", checkin.appetite),
        ("Energy Levels", checkin.energy_levels),
        ("Workouts", checkin.workouts),
        ("Digestion", checkin.digestion),
        ("Proud Achievement", checkin.proud_achievement),
        ("Hardest Part", checkin.hardest_part),
        ("Social Events", checkin.social_events),
        ("Confidence Next Week", checkin.confidence_next_week),
        ("Schedule Next Week", checkin.schedule_next_week),
        ("Habit to Improve", checkin.habit_to_improve),
    )
    lines.extend(f"- {label}: {answer or 'Not provided'}" for label, answer in reflections)
    lines.append("")
    return lines


def _adherence(label: str, matching: int, total: int) -> str:
    return f"- {label}: {matching}/{total} days ({_percent(matching, total)}%)"


def _daily_checkins_section(data: WeeklyData) -> List[str]:
    checkins = data.daily_checkins
    if not checkins:
        return ["DAILY CHECKINS: none logged this week", ""]
    lines = [f"DAILY CHECKINS ({len(checkins)} days logged):"]
    for checkin in checkins:
        lines.append(
            f"- {checkin.date}: Weight {_or_na(checkin.current_weight, 'kg')}, "
            f"Steps {_or_na(checkin.step_count)}, Sleep {_or_na(checkin.sleep_hours, 'h')}, "
            f"Trained: {_or_na(checkin.trained_today)}, Cardio: {_or_na(checkin.cardio_today)}, "
            f"Calorie Goal Met: {_or_na(checkin.calorie_goal_met)}"
        )

    weights = [c.current_weight for c in checkins if c.current_weight]
    steps = [c.step_count for c in checkins if c.step_count]
    sleep = [c.sleep_hours for c in checkins if c.sleep_hours]
    lines.extend(["", "DAILY CHECKIN SUMMARY:"])
    if weights:
        weight_line = (
            f"- Weight: Avg {_avg(weights):.1f}kg, Min {min(weights):.1f}kg, Max {max(weights):.1f}kg"
        )
        starting_weight = data.user_profile.goals.starting_weight if data.user_profile else None
        if starting_weight:
            weight_line += f", Change from start: {weights[-1] - starting_weight:+.1f}kg"
        lines.append(weight_line)
    if steps:
        lines.append(f"- Steps: Avg {_round_half_up(_avg(steps))}, Min {min(steps):.0f}, Max {max(steps):.0f}")
    if sleep:
        lines.append(f"- Sleep: Avg {_avg(sleep):.1f}h, Min {min(sleep):.1f}h, Max {max(sleep):.1f}h")

    total = len(checkins)
    lines.append(_adherence("Training Adherence", sum(1 for c in checkins if c.trained_today), total))
    lines.append(_adherence("Cardio Adherence", sum(1 for c in checkins if c.cardio_today), total))
    lines.append(_adherence("Calorie Goal Adherence", sum(1 for c in checkins if c.calorie_goal_met), total))
    lines.append("")
    return lines


def _food_diary_section(data: WeeklyData) -> List[str]:
    diaries = data.food_diaries
    if not diaries:
        return ["FOOD DIARIES: none logged this week", ""]
    goals = data.user_profile.goals if data.user_profile else None
    calorie_goal = goals.calorie_limit if goals else None
    protein_goal = goals.protein_goal if goals else None
    carb_goal = goals.carb_goal if goals else None
    fat_goal = goals.fat_goal if goals else None

    lines = [f"FOOD DIARIES ({len(diaries)} days logged):"]
    days_in_range = 0
    for diary in diaries:
        calories = diary.total_calories or 0
        if calorie_goal and calorie_goal * 0.9 <= calories <= calorie_goal * 1.1:
            days_in_range += 1
        lines.append(
            f"- {diary.date}: {calories:.0f} cal ({_deviation(calories, calorie_goal)} vs goal), "
            f"{diary.total_protein or 0:g}g protein, {diary.total_carbs or 0:g}g carbs, {diary.total_fat or 0:g}g fat"
        )

    avg_calories = _avg([d.total_calories or 0 for d in diaries])
    avg_protein = _avg([d.total_protein or 0 for d in diaries])
    avg_carbs = _avg([d.total_carbs or 0 for d in diaries])
    avg_fat = _avg([d.total_fat or 0 for d in diaries])
    in_range_pct = f"{_percent(days_in_range, len(diaries))}%" if calorie_goal else "N/A"
    lines.extend([
        "",
        "FOOD DIARY SUMMARY:",
        f"- Average Daily Calories: {avg_calories:.0f} (Goal: {_goal(calorie_goal)}, "
        f"{_deviation(avg_calories, calorie_goal)} vs goal)",
        f"- Average Daily Protein: {avg_protein:.1f}g (Goal: {_goal(protein_goal, 'g')}, "
        f"{_deviation(avg_protein, protein_goal)} vs goal)",
        f"- Average Daily Carbs: {avg_carbs:.1f}g (Goal: {_goal(carb_goal, 'g')}, "
        f"{_deviation(avg_carbs, carb_goal)} vs goal)",
        f"- Average Daily Fat: {avg_fat:.1f}g (Goal: {_goal(fat_goal, 'g')}, "
        f"{_deviation(avg_fat, fat_goal)} vs goal)",
        f"- Days Within 10% of Calorie Goal: {days_in_range}/{len(diaries)} ({in_range_pct})",
        "",
    ])
    return lines


def _goal_achievement(count: int, goal: Optional[float]) -> str:
    return f"{_percent(count, goal)}%" if goal else "N/A"


def _workout_section(data: WeeklyData) -> List[str]:
    logs = data.workout_logs
    if not logs:
        return ["WORKOUT LOGS: none logged this week", ""]
    goal = data.user_profile.goals.workout_sessions_per_week if data.user_profile else None
    completed = sum(1 for log in logs if log.status == SessionStatus.COMPLETED.value)
    lines = [f"WORKOUT LOGS ({len(logs)} sessions, {completed} completed):"]
    lines.extend(
        f"- {log.date}: {log.routine_name or 'Workout'} (Status: {log.status or 'N/A'})" for log in logs
    )
    lines.extend([
        "",
        "WORKOUT SUMMARY:",
        f"- Completed: {completed} sessions",
        f"- Weekly Goal: {_goal(goal)} sessions",
        f"- Goal Achievement: {_goal_achievement(completed, goal)}",
        "",
    ])
    return lines


def _cardio_section(data: WeeklyData) -> List[str]:
    logs = data.cardio_logs
    if not logs:
        return ["CARDIO LOGS: none logged this week", ""]
    goal = data.user_profile.goals.cardio_sessions_per_week if data.user_profile else None
    total_minutes = sum(log.time or 0 for log in logs)
    total_calories = sum(log.calories or 0 for log in logs)
    heart_rates = [log.avg_heart_rate for log in logs if log.avg_heart_rate]
    avg_heart_rate = f"{_round_half_up(_avg(heart_rates))} bpm" if heart_rates else "N/A"

    lines = [f"CARDIO LOGS ({len(logs)} sessions):"]
    lines.extend(
        f"- {log.date}: {log.name or 'Cardio'} - {log.time or 0:g} min, {log.calories or 0:g} calories, "
        f"HR {_or_na(log.avg_heart_rate, ' bpm')}"
        for log in logs
    )
    lines.extend([
        "",
        "CARDIO SUMMARY:",
        f"- Total Sessions: {len(logs)}",
        f"- Weekly Goal: {_goal(goal)} sessions",
        f"- Goal Achievement: {_goal_achievement(len(logs), goal)}",
        f"- Total Minutes: {total_minutes:g}",
        f"- Average Session Duration: {total_minutes / len(logs):.0f} minutes",
        f"- Total Calories Burned: {total_calories:g}",
        f"- Average Heart Rate: {avg_heart_rate}",
        "",
    ])
    return lines


def _water_section(data: WeeklyData) -> List[str]:
    logs = data.water_logs
    if not logs:
        return ["WATER LOGS: none logged this week", ""]
    goal = data.user_profile.goals.water_goal if data.user_profile else None
    avg_liters = _avg([(log.total_ml or 0) / 1000 for log in logs])
    days_met = sum(1 for log in logs if goal and (log.total_ml or 0) >= goal * 1000)
    days_met_pct = f"{_percent(days_met, len(logs))}%" if goal else "N/A"

    lines = [f"WATER LOGS ({len(logs)} days logged):"]
    lines.extend(f"- {log.date}: {(log.total_ml or 0) / 1000:.2f}L" for log in logs)
    lines.extend([
        "",
        "WATER SUMMARY:",
        f"- Average Daily Intake: {avg_liters:.2f}L",
        f"- Daily Goal: {_goal(goal, 'L')}",
        f"- Days Met Goal: {days_met}/{len(logs)} ({days_met_pct})",
        "",
    ])
    return lines


def format_weekly_data(data: WeeklyData) -> str:
    """Render a week of records as the plain-text report the coach analyzes."""
    lines = [f"=== WEEKLY DATA SUMMARY ({data.week_start_date}) ===", ""]
    lines += _profile_section(data.user_profile)
    lines += _weekly_checkin_section(data.weekly_checkin, "WEEKLY CHECKIN RESPONSES")
    lines += _daily_checkins_section(data)
    lines += _food_diary_section(data)
    lines += _workout_section(data)
    lines += _cardio_section(data)
    lines += _water_section(data)
    return "\n".join(lines).rstrip() + "\n"


def _ratio_line(label: str, done: str, goal: Optional[float], ratio: float, unit: str = "") -> str:
    if not goal:
        return f"- {label}: {done} (no goal set)"
    return f"- {label}: {done} of {_num(goal)}{unit} goal ({_round_half_up(ratio * 100)}%)"


def format_daily_data(data: DailyMessageData) -> str:
    """Condensed week-to-date report for the daily message."""
    progress = data.current_week_progress
    ratios = data.goal_progression
    goals = data.user_profile.goals if data.user_profile else None
    diaries = progress.food_diaries

    lines = [f"=== WEEK-TO-DATE PROGRESS ({data.date}, day {progress.days_into_week} of 7) ===", ""]
    lines += _profile_section(data.user_profile)

    lines.append("GOAL PROGRESSION:")
    lines.append(_ratio_line(
        "Workouts completed", str(len(progress.workout_logs)),
        goals.workout_sessions_per_week if goals else None, ratios.workout_progress, " sessions",
    ))
    lines.append(_ratio_line(
        "Cardio sessions", str(len(progress.cardio_logs)),
        goals.cardio_sessions_per_week if goals else None, ratios.cardio_progress, " sessions",
    ))
    if diaries:
        avg_calories = _avg([d.total_calories or 0 for d in diaries])
        avg_protein = _avg([d.total_protein or 0 for d in diaries])
        lines.append(_ratio_line(
            "Average daily calories", f"{avg_calories:.0f}",
            goals.calorie_limit if goals else None, ratios.calorie_progress,
        ))
        lines.append(_ratio_line(
            "Average daily protein", f"{avg_protein:.1f}g",
            goals.protein_goal if goals else None, ratios.protein_progress, "g",
        ))
        lines.append(f"- Food diary days logged: {len(diaries)}/{progress.days_into_week}")
    else:
        lines.append("- Food diary: nothing logged yet this week")
    lines.append("")

    checkins = progress.daily_checkins
    if checkins:
        total = len(checkins)
        lines.append(f"DAILY CHECKINS ({total}/{progress.days_into_week} days logged):")
        weights = [c.current_weight for c in checkins if c.current_weight]
        sleep = [c.sleep_hours for c in checkins if c.sleep_hours]
        if weights:
            lines.append(f"- Latest Weight: {weights[-1]:.1f}kg (week avg {_avg(weights):.1f}kg)")
        if sleep:
            lines.append(f"- Average Sleep: {_avg(sleep):.1f}h")
        lines.append(_adherence("Training Adherence", sum(1 for c in checkins if c.trained_today), total))
        lines.append(_adherence("Calorie Goal Adherence", sum(1 for c in checkins if c.calorie_goal_met), total))
    else:
        lines.append("DAILY CHECKINS: none logged yet this week")
    lines.append("")

    if progress.water_logs:
        avg_liters = _avg([(log.total_ml or 0) / 1000 for log in progress.water_logs])
        lines.append(
            f"WATER: average {avg_liters:.2f}L per logged day (Goal: {_goal(goals.water_goal if goals else None, 'L')})"
        )
        lines.append("")

    lines += _weekly_checkin_section(data.last_week_checkin, "LAST WEEK'S CHECKIN")
    return "\n".join(lines).rstrip() + "\n"


# ---------------------------
# Prompt composition
# ---------------------------

def compose_weekly_prompt(
    weekly_data: WeeklyData,
    coach_name: str = "AI Coach",
    coach_persona: str = "",
    custom_intensity_overrides: Optional[IntensityOverrides] = None,
) -> str:
    """Full instruction prompt for the weekly coaching message (JSON output)."""
    profile = weekly_data.user_profile
    return WEEKLY_COACH_PROMPT.format(
        coach_name=coach_name,
        preamble=_preamble(coach_name, coach_persona, weekly_data.previous_message),
        goal_type=_goal_type(profile),
        experience_instructions=experience_instruction(profile.experience_level if profile else None),
        intensity_instructions=intensity_instruction(
            profile.coach_intensity if profile else None, custom_intensity_overrides
        ),
        formatted_data=format_weekly_data(weekly_data),
        section_instructions=render_section_instructions(),
    )


def compose_daily_prompt(
    daily_data: DailyMessageData,
    coach_name: str = "AI Coach",
    coach_persona: str = "",
    custom_intensity_overrides: Optional[IntensityOverrides] = None,
) -> str:
    """Full instruction prompt for the daily coach message (plain text output)."""
    profile = daily_data.user_profile
    return DAILY_COACH_PROMPT.format(
        coach_name=coach_name,
        preamble=_preamble(coach_name, coach_persona),
        goal_type=_goal_type(profile),
        days_into_week=daily_data.current_week_progress.days_into_week,
        experience_instructions=experience_instruction(profile.experience_level if profile else None),
        intensity_instructions=intensity_instruction(
            profile.coach_intensity if profile else None, custom_intensity_overrides
        ),
        formatted_data=format_daily_data(daily_data),
    )

