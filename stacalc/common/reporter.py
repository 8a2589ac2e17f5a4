''' Decorator that attaches a report class to a results dataclass

    Usage:

        @reporter.reporter(ReportAnalysis)
        @dataclass
        class AnalysisResults:
            ...

    The results object then has a `report` property returning
    ReportAnalysis(results), and renders as markdown in Jupyter using the
    report's summary().
'''


def reporter(reportclass):
    ''' Class decorator adding `report` and `_repr_markdown_` to resultclass '''
    def decorator(resultclass):

        @property
        def report(self):
            return reportclass(self)

        def _repr_markdown_(self):
            return self.report.summary().get_md()

        resultclass.report = report
        resultclass._repr_markdown_ = _repr_markdown_
        return resultclass
    return decorator
