''' Markdown report formatting and rendering

    A Report collects text, tables, numbers, math and plots. Numbers, math and
    plots are stored as objects and only formatted when the report is rendered
    (get_md or get_html), so the same report can be output as plain text for
    a terminal or as latex/svg for a web page.
'''

import re
import base64
from io import BytesIO
from collections import ChainMap
from contextlib import suppress
import numpy as np
import sympy
import markdown
import matplotlib.pyplot as plt

from . import uparser


# Default mathjax script for embedding in HTML header
MATHJAX_URL = 'https://cdnjs.cloudflare.com/ajax/libs/mathjax/2.7.4/MathJax.js'

CSS = '''
body { font-family: sans-serif; font-size: 16px; line-height: 1.6; padding: 1em; margin: auto; max-width: 56em; }
h1, h2, h3 { font-weight: bold; }
table { border-collapse: collapse; margin: 1em 0; }
th, td { border: 1px solid #ccc; padding: 0.3em 0.8em; }
th { background-color: #eee; }
'''

# Defaults if kwargs aren't provided
default_sigfigs = 4
default_numformat = 'auto'
default_thresh = 5


class Number:
    ''' A formatted numeric value for use in a report

        Args:
            value (float): The value to report
            n (int): Number of significant figures
            fmt (string): Format for the number - auto, decimal, scientific, engineering
            fmin (int): Minimum number of decimal places, as override to n to
                prevent rounding too much.
            thresh (int): Exponent threshold for converting to scientific notation when in
                "auto" format. Numbers above 10**thresh will be printed in scientific
                notation.
    '''
    numfmts = ['auto', 'decimal', 'scientific', 'sci', 'engineering', 'eng']

    def __init__(self, value, **kwargs):
        self.value = value
        self.kwargs = kwargs

    def __str__(self):
        return self.string()

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.string()

    def string(self, **kwargs):
        ''' Get string representation of the number.

            Args:
                See Number arguments. Anything defined in
                Number __init__ kwargs override the string() kwargs
        '''
        kargs = ChainMap(self.kwargs, kwargs)
        figs = kargs.get('n', default_sigfigs)
        fmin = kargs.get('fmin', None)
        fmt = kargs.get('fmt', default_numformat).lower()
        thresh = kargs.get('thresh', default_thresh)

        if fmt not in self.numfmts:
            raise ValueError(f'Number Format must be one of {", ".join(self.numfmts)}')
        if figs < 1:
            raise ValueError('Significant Figures must be >= 1')

        value = self.value
        if value is None:
            return 'nan'
        elif not np.isfinite(value):
            return format(value)  # 'nan' or 'inf'
        elif value == 0:
            numstr = '0' if figs == 1 else '0.' + '0'*(figs-1)
            if fmt in ['sci', 'scientific', 'eng', 'engineering']:
                numstr += 'e+00'
            return numstr

        if fmt == 'auto':
            fmt = 'sci' if abs(value) > 10**thresh or abs(value) < 10**-thresh else 'decimal'

        exp = int(np.floor(np.log10(abs(value))))   # Exponent if written in exp. notation.
        roundto = -(exp - (figs-1))
        if fmin is not None:
            roundto = max(fmin, roundto)
            figs = roundto + exp + 1

        if fmt == 'decimal':
            return f'{np.round(value, roundto):.{max(0, roundto)}f}'
        elif fmt in ('sci', 'scientific'):
            return f'{value:.{max(0, figs-1)}e}'

        # Engineering: exponent as multiple of 3
        exp3 = exp - (exp % 3)
        value = value/(10**exp3)
        roundto = max(0, -int((np.floor(np.log10(abs(value)))) - (figs-1)))
        return f'{np.round(value, roundto):.{roundto}f}e{exp3:+03d}'


class Math:
    ''' A formatted mathematical expression for use in a report

        Args:
            expr (string): The expression to print. Must be sympify-able string.
                Use `from_latex` or `from_sympy` to instantiate from other formats.
    '''
    def __init__(self, expr=None):
        self.sympyexpr = None
        self.latexexpr = None
        self.prettytextexpr = None
        self.simpletextexpr = None
        if expr is not None:
            sympyexpr = uparser.parse_math(uparser.to_evaluable(expr), raiseonerr=False)
            if sympyexpr is not None:
                self._set_sympy(sympyexpr)
            else:
                self.latexexpr = uparser.to_display(expr)
                self.prettytextexpr = expr
                self.simpletextexpr = expr

    def _set_sympy(self, expr):
        self.sympyexpr = expr
        self.latexexpr = sympy.latex(expr).replace(r'\limits', '')
        self.prettytextexpr = sympy.pretty(expr)  # May use multiple lines for fractions, etc.
        self.simpletextexpr = str(expr)

    @classmethod
    def from_latex(cls, tex):
        ''' Create Math object from a latex expression. Text output is the
            latex itself.
        '''
        math = cls()
        math.latexexpr = tex.strip('$')
        math.prettytextexpr = math.latexexpr
        math.simpletextexpr = math.latexexpr
        return math

    @classmethod
    def from_sympy(cls, expr):
        ''' Create Math object from a sympy object. '''
        math = cls()
        math._set_sympy(expr)
        return math

    def __str__(self):
        if self.simpletextexpr is not None:
            return self.simpletextexpr
        return str(self.latexexpr)

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.latex()

    def latex(self, enclose=('$', '$')):
        ''' Return math as latex-compatible string.

            Args:
                enclose (tuple): Escape characters to enclose latex string
        '''
        if self.latexexpr:
            return enclose[0] + self.latexexpr + enclose[1]
        return ''

    def prettytext(self):
        ''' Return math as pretty-printed plain text. May contain unicode characters '''
        return self.prettytextexpr or ''

    def simpletext(self):
        ''' Return math as simple/plain text, ascii only characters '''
        return self.simpletextexpr or ''


class Plot:
    ''' A matplotlib figure for use in a report.

        Args:
            fig (plt.Figure): The figure to format
    '''
    def __init__(self, fig=None):
        self.fig = fig

    def __del__(self):
        with suppress(TypeError, AttributeError):  # Interpreter shutdown
            plt.close(self.fig)

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return f'![]({self.svg_b64()})'

    def png_b64(self, dpi=120):
        ''' Render to base-64 encoded PNG

            Args:
                dpi (int): Dots per inch for PNG
        '''
        buf = BytesIO()
        self.fig.savefig(buf, format='png', dpi=dpi)
        b64 = base64.b64encode(buf.getvalue()).decode('utf-8')
        return f'data:image/png;base64,{b64}'

    def svg_str(self):
        ''' Render to SVG string '''
        buf = BytesIO()
        self.fig.savefig(buf, bbox_inches='tight', format='svg')
        svg = buf.getvalue().decode('utf-8')
        return svg[svg.find('<svg'):]  # Strip XML header stuff

    def svg_b64(self):
        ''' Render base-64 encoded SVG string, prefixed for use in markdown or html image tag '''
        b64 = base64.b64encode(self.svg_str().encode('utf-8')).decode('utf-8')
        return f'data:image/svg+xml;base64,{b64}'

    def textplot(self, char='o'):
        ''' Plot the figure lines as plain text/ascii '''
        plotstrs = []
        for ax in self.fig.axes:
            for line in ax.lines:
                xdata, ydata = line.get_data()
                plotstrs.append(textplot(xdata, ydata, char=char))
        return '\n\n'.join(plotstrs) + '\n\n'


def textplot(xvals, yvals, W=55, H=18, char='.'):
    ''' Plot x, y data in plain-text string format as scatter plot

        Args:
            xvals, yvals (arrays): Arrays of x, y data to plot
            char (string): Character to print for each data point
            H (int): Character height of plot
            W (int): Character width of plot
    '''
    xvals = np.asarray(xvals, dtype=float)
    yvals = np.asarray(yvals, dtype=float)
    idx = np.isfinite(yvals) & np.isfinite(xvals)
    xvals, yvals = xvals[idx], yvals[idx]
    if len(xvals) == 0:
        return ''

    xmin, xmax = xvals.min(), xvals.max()
    ymin, ymax = min(yvals.min(), 0), yvals.max()
    xnorm = np.zeros(len(xvals), dtype=int) if xmin == xmax else ((xvals-xmin)/(xmax-xmin) * (W-1)).astype(int)
    ynorm = np.zeros(len(yvals), dtype=int) if ymin == ymax else ((yvals-ymin)/(ymax-ymin) * (H-1)).astype(int)

    s = np.full((H, W), ' ')
    for xi, yi in zip(xnorm, ynorm):
        s[yi][xi] = char

    margin = 7
    lines = []
    for h, line in enumerate(reversed(s)):
        if h == 0:
            prefix = f'{ymax:.4g}'.rjust(margin)[:margin]
        elif h == H-1:
            prefix = f'{ymin:.4g}'.rjust(margin)[:margin]
        else:
            prefix = ' ' * margin
        lines.append(prefix + '|' + ''.join(line))

    lines.append(' ' * margin + '-'*W)
    bottom = ' ' * (margin + 1)
    bottom += f'{xmin:.4g}'.ljust(W//2 - 3)
    bottom += f'{(xmin+xmax)/2:.4g}'.ljust(W//2 - 3)
    bottom += f'{xmax:.4g}'
    lines.append(bottom)
    return '\n'.join(lines)


class Report:
    ''' A Report consisting of text, plots, math equations, and values for
        formatting in different formats.

        Args:
            mathfmt (string): Format for math expressions - latex, text (pretty), ascii.
            mathdelim (tuple): Delimiter/escape characters for math expressions, typically ('$', '$').
            figfmt (string): Format for matplotlib figures - svg, png, or text
            n (int): Significant figures for numbers
    '''
    def __init__(self, **kwargs):
        self._s = ''
        self._plots = []
        self._values = []
        self._eqns = []
        self.kwargs = kwargs

    def __str__(self):
        return self.get_md()

    def _repr_markdown_(self):
        ''' Markdown representation for Jupyter '''
        return self.get_md()

    def hdr(self, text, level=1):
        ''' Add a header to the report

            Args:
                text (string): Text of the header
                level (int): Header level. 1 is top level (# HEADER) in markdown.
        '''
        self._s += f'{"#"*level} {text}\n\n'

    def txt(self, text):
        ''' Add text to the report '''
        self._s += text

    def newline(self):
        ''' Add a line break '''
        self._s += '\n\n'

    def sympy(self, sympyexpr, end=''):
        ''' Add a sympy expression to the report '''
        self._s += self._insert_obj(Math.from_sympy(sympyexpr), end=end)

    def mathexpr(self, mathstr, end=''):
        ''' Add a math expression (sympify-able string) to the report '''
        self._s += self._insert_obj(Math(mathstr), end=end)

    def mathtex(self, mathstr, end=''):
        ''' Add a math latex expression to the report '''
        self._s += self._insert_obj(Math.from_latex(mathstr), end=end)

    def plot(self, fig, end='\n\n'):
        ''' Add matplotlib figure to the report '''
        self._s += self._insert_obj(Plot(fig), end=end)

    def num(self, value, end='', **kwargs):
        ''' Add a Numeric value to the report

            Args:
                value (float): Value to represent
                end (string): Characters to print after the value
                **kwargs: passed to Number class
        '''
        self._s += self._insert_obj(Number(value, **kwargs), end=end)

    def _insert_obj(self, obj, end=''):
        ''' Insert an object and return the string to add to _s '''
        if isinstance(obj, Number):
            s = f'[[VAL{len(self._values)}]]{end}'
            self._values.append(obj)
        elif isinstance(obj, Math):
            s = f'[[EQN{len(self._eqns)}]]{end}'
            self._eqns.append(obj)
        elif isinstance(obj, sympy.Basic):
            s = f'[[EQN{len(self._eqns)}]]{end}'
            self._eqns.append(Math.from_sympy(obj))
        elif isinstance(obj, Plot):
            s = f'[[PLT{len(self._plots)}]]{end}'
            self._plots.append(obj)
        elif isinstance(obj, (list, tuple)):
            s = ''.join(self._insert_obj(child) for child in obj) + end
        else:  # Text
            s = f'{obj}{end}'
        return s

    def table(self, rows, hdr):
        ''' Add a table to the report

            Args:
                rows (list): List of lists for each row. Each list item may be a
                    string, Number, Math, or a tuple containing multiple string,
                    Number, and Math objects for the table cell.
                hdr (list): List of items for the table header.
        '''
        if hdr is None:
            hdr = ['-'] * len(rows[0])  # Markdown tables must have a header row

        lines = ['| ' + ' | '.join(self._insert_obj(col) for col in hdr) + ' |',
                 '|' + '|'.join('---' for _ in hdr) + '|']
        for row in rows:
            lines.append('| ' + ' | '.join(self._insert_obj(col) for col in row) + ' |')
        self._s += '\n' + '\n'.join(lines) + '\n\n'

    def add(self, *args, end='\n'):
        ''' Add multiple items (string, Number, Math, sympy) to the report '''
        for arg in args:
            self._s += self._insert_obj(arg, end=end)

    def append(self, report, end=''):
        ''' Append another report onto this one '''
        appendstring = report._s

        # Go backwards through the tagged objects to renumber them
        for tag, mine, theirs in (('PLT', self._plots, report._plots),
                                  ('EQN', self._eqns, report._eqns),
                                  ('VAL', self._values, report._values)):
            for i in range(len(theirs)-1, -1, -1):
                appendstring = appendstring.replace(f'[[{tag}{i}]]', f'[[{tag}{i+len(mine)}]]')
        self._plots.extend(report._plots)
        self._eqns.extend(report._eqns)
        self._values.extend(report._values)
        self._s += appendstring + end

    def get_md(self, **kwargs):
        ''' Get the report in markdown format.

            Args:
                **kwargs: See Report class. Arguments specified at Report
                instantiation override arguments given here.
        '''
        kargs = ChainMap(self.kwargs, kwargs)
        mathfmt = kargs.get('mathfmt', 'latex')
        mathdelim = kargs.get('mathdelim', ('$', '$'))
        figfmt = kargs.get('figfmt', 'svg')
        pngdpi = kargs.get('pngdpi', 120)

        def replace(match):
            obj, idx = match.group(1), int(match.group(2))
            if obj == 'EQN':
                eqn = self._eqns[idx]
                if mathfmt == 'latex':
                    return eqn.latex(enclose=mathdelim)
                elif mathfmt == 'ascii':
                    return eqn.simpletext()
                return eqn.prettytext()
            elif obj == 'VAL':
                return self._values[idx].string(**kargs)
            p = self._plots[idx]
            if figfmt in ['text', 'txt']:
                return p.textplot()
            elif figfmt == 'png':
                return f'![]({p.png_b64(dpi=pngdpi)})'
            return f'![]({p.svg_b64()})'

        return re.sub(r'\[\[(EQN|VAL|PLT)(\d+)\]\]', replace, self._s).strip()

    def get_html(self, **kwargs):
        ''' Get report in HTML format, including CSS and mathjax header if needed. '''
        head = '<style type="text/css">' + CSS + '</style>'
        if kwargs.get('mathfmt', 'latex') == 'latex':
            # Mathjax header that includes $..$, not just default of only $$..$$
            head += (r'''<script type="text/x-mathjax-config"> MathJax.Hub.Config('''
                     r'''{tex2jax: {inlineMath: [['$','$'], ['\\(','\\)']]}});</script>'''
                     r'''<script type="text/javascript" async src="''' + MATHJAX_URL +
                     r'''?config=TeX-AMS_CHTML"></script>''')

        html = markdown.markdown(self.get_md(**kwargs), extensions=['markdown.extensions.tables'])
        html = html.encode('ascii', 'xmlcharrefreplace').decode('utf-8')
        return head + '\n' + html

