"""
scoring/ - TORP quote scoring engine

Modules:
    utils.py                     - Decimal utilities
    criteria/                    - Criterion evaluators, one module per axis family
    axes.py                      - Axis evaluation (mean of criteria × max points)
    grade_classifier.py          - Score → letter grade threshold tables
    rubric.py                    - Legacy / advanced rubric definitions and registry
    confidence_calculator.py     - Dispersion-based confidence
    alert_generator.py           - Data and axis threshold alerts
    recommendation_generator.py  - Per-axis and overall recommendations
    benchmark_comparator.py      - Regional price percentile
    engine.py                    - ScoreEngine orchestration
    ml_adjustment.py             - Optional ML-blended score
"""
