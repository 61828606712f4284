"""
scoring/ - Appraisal Scoring & Aggregation Engine

Modules:
    utils.py                  - Decimal rounding helpers
    capacity_normalizer.py    - Behavior-rating label → Capacity mapping
    evaluation_selector.py    - Latest evaluation / zero-filled default
    score_aggregator.py       - Raw totals, 3/7-point scaling, overall score
    eligibility.py            - Evaluation window gate
    integration_service.py    - Full record → view pipeline
"""
