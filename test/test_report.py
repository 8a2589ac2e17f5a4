''' Test report formatters '''
import numpy
import sympy
import matplotlib.pyplot as plt

from stacalc.common import report
from stacalc import DistAnalyzer


def test_format():
    ''' Test significant figure formatter '''
    assert report.Number(0, n=1).string(fmt='decimal') == '0'      # Zeros are handled separately
    assert report.Number(0, n=2).string(fmt='decimal') == '0.0'
    assert report.Number(0, n=2).string(fmt='sci') == '0.0e+00'
    assert report.Number(1, n=1).string(fmt='decimal') == '1'
    assert report.Number(1, n=4).string(fmt='decimal') == '1.000'
    assert report.Number(1, n=1).string(fmt='sci') == '1e+00'      # Scientific notation
    assert report.Number(1.23456E6, n=4).string(fmt='sci') == '1.235e+06'   # note rounding
    assert report.Number(1.2E1, n=2).string(fmt='eng') == '12e+00'  # Engineering notation
    assert report.Number(1.2E3, n=2).string(fmt='eng') == '1.2e+03'
    assert report.Number(1.2E5, n=2).string(fmt='eng') == '120e+03'
    assert report.Number(1.23456, n=3).string() == '1.23'              # Auto format
    assert report.Number(123.456, n=3).string() == '123'
    assert report.Number(12345.67, n=3).string() == '12300'
    assert report.Number(123456.7, n=3).string() == '1.23e+05'         # Number > thresh
    assert report.Number(-123456.7, n=3).string() == '-1.23e+05'       # Negative too
    assert report.Number(1.234567E-6).string(n=3, thresh=7) == '0.00000123'
    assert report.Number(numpy.inf).string(n=3) == 'inf'
    assert report.Number(numpy.nan).string(n=3) == 'nan'
    assert report.Number(None).string() == 'nan'
    assert report.Number(.5, fmin=3).string(n=1) == '0.500'


def test_math():
    m = report.Math('x^2')
    assert m.latex() == '$x^{2}$'
    assert m.simpletext() == 'x**2'
    m = report.Math.from_latex('$f(x) = 2e^{-2x}$')
    assert m.latex() == '$f(x) = 2e^{-2x}$'
    assert m.prettytext() == 'f(x) = 2e^{-2x}'
    m = report.Math.from_sympy(sympy.Symbol('t')**2)
    assert m.latex(enclose=('$$', '$$')) == '$$t^{2}$$'


def test_report():
    ''' Build a report and render it '''
    r = report.Report()
    r.hdr('Title', level=2)
    r.txt('Some text. ')
    r.num(numpy.pi, n=3)
    r.newline()
    r.table([['a', report.Number(1.5)], ['b', report.Math('x^2')]], ['Name', 'Value'])
    md = r.get_md()
    assert md.startswith('## Title')
    assert 'Some text. 3.14' in md
    assert '| a | 1.500 |' in md
    assert '| b | $x^{2}$ |' in md

    html = r.get_html()
    assert '<table>' in html
    assert '<h2>Title</h2>' in html


def test_append():
    ''' Appended reports renumber their values and equations '''
    r1 = report.Report()
    r1.num(1)
    r1.mathexpr('x^2', end=' ')
    r2 = report.Report()
    r2.num(2)
    r2.mathexpr('x^3')
    r1.append(r2)
    md = r1.get_md(n=2)
    assert md == '1.0$x^{2}$ 2.0$x^{3}$'


def test_plot():
    ''' Plots render as text, svg or png '''
    fig, ax = plt.subplots()
    ax.plot([0, 1, 2, 3], [0, 1, 4, 9])
    r = report.Report()
    r.plot(fig)
    assert '|' in r.get_md(figfmt='text')
    assert 'data:image/svg+xml;base64' in r.get_md(figfmt='svg')
    assert 'data:image/png;base64' in r.get_md(figfmt='png')


def test_textplot():
    txt = report.textplot([0, 1, 2], [0, 1, 0])
    assert len(txt.splitlines()) == 20
    assert report.textplot([], []) == ''


def test_analysis_report():
    ''' Reports of analyzer results '''
    result = DistAnalyzer('2e^(-2x)', '0<x<infinity').calculate(moments_r=[3], probs=[1])
    md = result.report.summary().get_md(mathfmt='text')
    assert 'Exponential Distribution' in md
    assert 'Moments' in md
    assert 'Probabilities' in md
    assert 'M_X(t)' in md

    md = result.report.all().get_md(mathfmt='text', figfmt='text')
    assert 'Exponential Distribution' in md

    result = DistAnalyzer('x', '0<x<2').calculate()
    md = result.report.summary().get_md(mathfmt='text')
    assert 'Normalization constant' in md
    assert '0.5000' in md

    result = DistAnalyzer('x/6', '0,1,2,3').calculate()
    md = result.report.all().get_md(mathfmt='latex', figfmt='text')
    assert 'Not recognized' in md
    assert '\\sum' in md
    assert result._repr_markdown_()
