class IntelligenceError(Exception):
    """Base class for errors raised by the scoring engine."""


class ScoringPipelineError(IntelligenceError):
    pass


class UnknownStrategyError(ScoringPipelineError):
    def __init__(self, strategy: str):
        self.strategy = strategy
        super().__init__(f"Unknown temperament strategy: {strategy!r}")
