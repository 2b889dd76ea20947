"""
Bundled exercise catalog, imported into the database on first start.
"""
from app.models.exercise import MuscleGroupEnum as M, EquipmentEnum as E

EXERCISE_LIBRARY = (
    # Chest
    {"name": "Barbell Bench Press", "muscle_group": M.chest, "equipment": E.barbell, "is_compound": True,
     "default_reps": 8, "instructions": "Lower the bar to mid-chest, press to lockout."},
    {"name": "Incline Dumbbell Bench Press", "muscle_group": M.chest, "equipment": E.dumbbell, "is_compound": True,
     "default_reps": 10},
    {"name": "Machine Chest Press", "muscle_group": M.chest, "equipment": E.machine, "is_compound": True,
     "default_reps": 12},
    {"name": "Push Up", "muscle_group": M.chest, "equipment": E.bodyweight, "is_compound": True,
     "default_reps": 15},
    {"name": "Cable Fly", "muscle_group": M.chest, "equipment": E.cable, "is_compound": False,
     "default_reps": 12, "default_tempo": "3-1-1-0"},
    # Back
    {"name": "Pull Up", "muscle_group": M.back, "equipment": E.bodyweight, "is_compound": True,
     "default_reps": 8},
    {"name": "Barbell Row", "muscle_group": M.back, "equipment": E.barbell, "is_compound": True,
     "default_reps": 8},
    {"name": "Seated Cable Row", "muscle_group": M.back, "equipment": E.cable, "is_compound": True,
     "default_reps": 10},
    {"name": "Lat Pulldown", "muscle_group": M.back, "equipment": E.cable, "is_compound": True,
     "default_reps": 10},
    # Shoulders
    {"name": "Overhead Press", "muscle_group": M.shoulders, "equipment": E.barbell, "is_compound": True,
     "default_reps": 6, "instructions": "Press from the front rack to overhead, ribs down."},
    {"name": "Dumbbell Shoulder Press", "muscle_group": M.shoulders, "equipment": E.dumbbell, "is_compound": True,
     "default_reps": 10},
    {"name": "Lateral Raise", "muscle_group": M.shoulders, "equipment": E.dumbbell, "is_compound": False,
     "default_reps": 15},
    # Arms
    {"name": "Dumbbell Bicep Curl", "muscle_group": M.biceps, "equipment": E.dumbbell, "is_compound": False,
     "default_reps": 12},
    {"name": "Hammer Curl", "muscle_group": M.biceps, "equipment": E.dumbbell, "is_compound": False,
     "default_reps": 12},
    {"name": "Tricep Pushdown", "muscle_group": M.triceps, "equipment": E.cable, "is_compound": False,
     "default_reps": 12},
    {"name": "Skull Crusher", "muscle_group": M.triceps, "equipment": E.barbell, "is_compound": False,
     "default_reps": 10},
    {"name": "Wrist Curl", "muscle_group": M.forearms, "equipment": E.dumbbell, "is_compound": False,
     "default_reps": 15},
    {"name": "Farmer's Carry", "muscle_group": M.forearms, "equipment": E.kettlebell, "is_compound": True},
    # Legs
    {"name": "Barbell Back Squat", "muscle_group": M.quads, "equipment": E.barbell, "is_compound": True,
     "default_reps": 5, "default_tempo": "3-0-1-0", "instructions": "Break at hips and knees together, hit depth."},
    {"name": "Leg Press", "muscle_group": M.quads, "equipment": E.machine, "is_compound": True,
     "default_reps": 10},
    {"name": "Leg Extension", "muscle_group": M.quads, "equipment": E.machine, "is_compound": False,
     "default_reps": 12},
    {"name": "Romanian Deadlift", "muscle_group": M.hamstrings, "equipment": E.barbell, "is_compound": True,
     "default_reps": 8},
    {"name": "Lying Leg Curl", "muscle_group": M.hamstrings, "equipment": E.machine, "is_compound": False,
     "default_reps": 12},
    {"name": "Hip Thrust", "muscle_group": M.glutes, "equipment": E.barbell, "is_compound": True,
     "default_reps": 10},
    {"name": "Bulgarian Split Squat", "muscle_group": M.glutes, "equipment": E.dumbbell, "is_compound": True,
     "default_reps": 10},
    {"name": "Standing Calf Raise", "muscle_group": M.calves, "equipment": E.machine, "is_compound": False,
     "default_reps": 15},
    # Core
    {"name": "Hanging Leg Raise", "muscle_group": M.abs, "equipment": E.bodyweight, "is_compound": False,
     "default_reps": 12},
    {"name": "Cable Crunch", "muscle_group": M.abs, "equipment": E.cable, "is_compound": False,
     "default_reps": 15},
    {"name": "Resistance Band Pallof Press", "muscle_group": M.abs, "equipment": E.band, "is_compound": False},
    # Full body
    {"name": "Conventional Deadlift", "muscle_group": M.full_body, "equipment": E.barbell, "is_compound": True,
     "default_reps": 5, "instructions": "Bar over mid-foot, push the floor away, lock hips and knees together."},
    {"name": "Kettlebell Swing", "muscle_group": M.full_body, "equipment": E.kettlebell, "is_compound": True,
     "default_reps": 20},
    {"name": "Sled Push", "muscle_group": M.full_body, "equipment": E.other, "is_compound": True},
)
