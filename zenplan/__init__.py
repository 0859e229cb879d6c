"""ZenPlan: dated schedules with checklists and a daily AI companion."""
