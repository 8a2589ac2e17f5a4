'''
Functions for evaluating a string expression into a value. Safe wrappers around sympy eval()
by analyzing the expression with the ast module.

Student-typed functions ("2e^-2x", "x^2(1-x)^3", "e^-4 4^x/x!") are first rewritten
into an evaluable form by to_evaluable(), and into a display form by to_display().
'''

import ast
import re
from tokenize import TokenError
import numpy as np
import sympy


# List of sympy functions allowed for converting strings to sympy
_functions = ['acos', 'asin', 'atan', 'atan2', 'cos', 'sin', 'tan',
              'log', 'cosh', 'sinh', 'tanh', 'atanh', 'acosh', 'asinh',
              'sqrt', 'exp', 'root', 'factorial', 'gamma', 'binomial', 'erf',
              # Include functions we redefine
              'ln', 'log10', 'arccos', 'arcsin', 'arctan',
              ]

# Anything defined in sympy but NOT in _functions should be treated as a symbol, not a function
# for example, assume if the function string contains 'lex', we want a variable lex, not the LexOrder function.
_sympys = ['Symbol', 'Integer', 'Float', 'Rational', 'pi', 'E']  # But keep these as sympy objects, not symbols
_locals = dict((f, sympy.Symbol(f)) for f in dir(sympy) if '_' not in f and f not in _functions and f not in _sympys)

# Add some aliases for common stuff
_locals['inf'] = sympy.oo
_locals['e'] = sympy.E
_locals['ln'] = sympy.log
_locals['arccos'] = sympy.acos
_locals['arcsin'] = sympy.asin
_locals['arctan'] = sympy.atan

# And this one not defined as a single sympy func
_locals['log10'] = lambda x: sympy.log(x, 10)

# Identifier or number immediately before a "!"
_FACTORIAL_TERM = re.compile(r'([a-z_][a-z_0-9]*|\d+\.?\d*)!')
# e^ not part of a longer identifier (e.g. "name^2"). "xe^-x" is x*e^-x.
_EXP_START = re.compile(r'(?<![a-z_][a-z_])e\^')
# Unparenthesized exponent: signed number, variable, or product of them (e^-2x, e^-0.5*x, e^x)
_EXP_TERM = re.compile(r'[+-]?(?:\d+\.?\d*|\.\d+)?(?:\*?[a-z](?![a-z(]))?(?:\*(?:\d+\.?\d*|[a-z](?![a-z(])))*')
# Number that is not part of an identifier (log10) and not scientific notation (1e-3)
_IMPLICIT_MULT = re.compile(r'(?<![a-z_0-9.])(\d+\.?\d*|\.\d+)(?=[a-z(])(?!e[+-]?\d)')
# The variables x and t followed by a group: x(1-x)
_IMPLICIT_MULT_VAR = re.compile(r'((?<![a-z_0-9])[xt])(?=\()')
# A closed group followed by a group, name or number: (1-x)(1+x), (1-x)x, (x+1)2
_IMPLICIT_MULT_GROUP = re.compile(r'\)(?=[a-z0-9.(])')


def _matching_paren(expr, start):
    ''' Index of the parenthesis closing the one at expr[start], or -1 '''
    depth = 0
    for i in range(start, len(expr)):
        if expr[i] == '(':
            depth += 1
        elif expr[i] == ')':
            depth -= 1
            if depth == 0:
                return i
    return -1


def _opening_paren(expr, end):
    ''' Index of the parenthesis opening the one closed at expr[end], or -1 '''
    depth = 0
    for i in range(end, -1, -1):
        if expr[i] == ')':
            depth += 1
        elif expr[i] == '(':
            depth -= 1
            if depth == 0:
                return i
    return -1


def _rewrite_exp(expr):
    ''' Rewrite e^(...) and e^term into exp(...) '''
    match = _EXP_START.search(expr)
    while match:
        start, pos = match.start(), match.end()
        sign = ''
        if expr[pos:pos+2] in ('-(', '+('):
            sign = expr[pos]
            pos += 1
        if expr[pos:pos+1] == '(':
            close = _matching_paren(expr, pos)
            if close < 0:
                close = len(expr)
                expr = expr + ')'
            exponent = expr[pos+1:close]
            if sign == '-':
                exponent = f'-({exponent})'
            end = close + 1
        else:
            term = _EXP_TERM.match(expr, pos)
            exponent = term.group(0)
            end = term.end()
            if not exponent:
                break   # Dangling "e^", leave it for the parser to reject
        joiner = '*' if start > 0 and (expr[start-1].isalnum() or expr[start-1] in ').') else ''
        expr = f'{expr[:start]}{joiner}exp({exponent}){expr[end:]}'
        match = _EXP_START.search(expr)
    return expr


def _rewrite_factorial(expr):
    ''' Rewrite x! and (x+1)! into factorial(...) '''
    while '!' in expr:
        idx = expr.index('!')
        if idx > 0 and expr[idx-1] == ')':
            start = _opening_paren(expr, idx-1)
            if start < 0:
                break
            expr = f'{expr[:start]}factorial{expr[start:idx]}{expr[idx+1:]}'
        else:
            match = None
            for m in _FACTORIAL_TERM.finditer(expr[:idx+1]):
                if m.end() == idx+1:
                    match = m
            if match is None:
                break
            expr = f'{expr[:match.start()]}factorial({match.group(1)}){expr[idx+1:]}'
    return expr


def to_evaluable(expr):
    ''' Normalize a user-typed function into a string the parser can evaluate.

        Lower-cases, removes whitespace, converts e^.. into exp(..), x! into
        factorial(x), and inserts explicit multiplication after numbers and
        closed groups (2x -> 2*x, 3(x+1) -> 3*(x+1), (1-x)x -> (1-x)*x).
        Normalizing an already-normalized
        string returns it unchanged.

        Args:
            expr (string): Function as typed

        Returns:
            expr (string): Evaluable function string
    '''
    expr = re.sub(r'\s+', '', str(expr)).lower()
    expr = expr.replace('**', '^')
    expr = _rewrite_exp(expr)
    expr = _rewrite_factorial(expr)
    expr = _IMPLICIT_MULT.sub(r'\1*', expr)
    expr = _IMPLICIT_MULT_VAR.sub(r'\1*', expr)
    expr = _IMPLICIT_MULT_GROUP.sub(')*', expr)
    return expr


def to_display(expr):
    ''' Convert a function string into typeset-friendly notation.

        Multiplication becomes a centered dot, exp(..) goes back to e^{..},
        and exponents are wrapped in braces so they group correctly.
    '''
    expr = re.sub(r'\s+', '', str(expr)).replace('**', '^')

    start = expr.find('exp(')
    while start > -1:
        close = _matching_paren(expr, start+3)
        if close < 0:
            break
        expr = f'{expr[:start]}e^{{{expr[start+4:close]}}}{expr[close+1:]}'
        start = expr.find('exp(')

    expr = re.sub(r'\^([+-]?[a-zA-Z0-9.]+)', r'^{\1}', expr)
    expr = expr.replace('*', '·')
    return expr


def parse_math(expr, name=None, allowcomplex=False, raiseonerr=True):
    ''' Parse the math expression string into a Sympy expression. Only basic
        math operations are allowed, such as 4-function math, exponents, and
        standard trigonometric, logarithm and factorial functions.

        Args:
            expr (string): Expression to evaluate
            name: string: Name of function to check that function is not
                self-recursive (e.g. f = 2*f)
            allowcomplex (bool): Allow complex numbers (I) in expression
            raiseonerr (bool): Raise exception on parse error. If False, None
                will be returned on error.

        Returns:
            expr: Sympy expression
    '''
    if raiseonerr:
        return _parse_math(expr, name=name, allowcomplex=allowcomplex)

    try:
        expr = _parse_math(expr, name=name, allowcomplex=allowcomplex)
    except (ValueError, AttributeError, TypeError, TokenError):
        expr = None
    return expr


def _parse_math(expr, fns=None, name=None, allowcomplex=False):
    ''' Parse the math expression and return Sympy expression if valid.
        Raise an error if not valid.

        Args:
            expr (string): Expression to evaluate
            fns (string list, optional): List of allowed functions in expression.
                Default allows basic trig and other functions listed in uparser._functions.
            name (string): Name of function to check that function is not
                self-recursive (e.g. f = 2*f)
            allowcomplex (bool): Allow complex numbers (I) in expression

        Notes:
            Default allows only 4-function math, exponents, and a few binary ops.
    '''
    if fns is None:
        fns = _functions
    allowed = (ast.Module, ast.Expr, ast.BinOp,
               ast.Name, ast.UnaryOp, ast.Load,
               ast.Add, ast.Mult, ast.Sub, ast.Div, ast.Pow,
               ast.USub, ast.UAdd, ast.Constant)

    if allowcomplex:
        fns = fns + ['re', 'im']

    if not isinstance(expr, str):
        raise ValueError(f'Non string expression {expr}')

    expr = expr.replace('^', '**')  # Assume we want power, not bitwise XOR

    try:
        b = ast.parse(expr)
    except SyntaxError as exc:
        raise ValueError(f'Invalid syntax in function: "{expr}"') from exc

    for node in ast.walk(b):
        if isinstance(node, ast.Call):
            # Function call, must be in allowed list of functions
            if not hasattr(node.func, 'id') or node.func.id not in fns:
                raise ValueError(f'Invalid function call in "{expr}"')

        elif not isinstance(node, allowed):
            # Other operator. Must be in whitelist.
            raise ValueError(f'Invalid expression: "{expr}"')

    localdict = dict(_locals)
    if allowcomplex:
        localdict['I'] = sympy.I
        localdict['re'] = sympy.re
        localdict['im'] = sympy.im
    else:
        localdict['I'] = sympy.Symbol('I')
        localdict['re'] = sympy.Symbol('re')
        localdict['im'] = sympy.Symbol('im')

    try:
        fn = sympy.sympify(expr, localdict)
    except (ValueError, TypeError, sympy.SympifyError) as exc:
        raise ValueError(f'Cannot sympify expression "{expr}"') from exc

    if not hasattr(fn, 'free_symbols'):
        # Didn't sympify into an expression, possibly a function only (e.g. "sqrt")
        raise ValueError(f'Incomplete expression {expr}')

    if name and name in [str(i) for i in fn.free_symbols]:
        raise ValueError(f'Recursive function "{name} = {expr}"')

    if not allowcomplex and sympy.I in fn.atoms(sympy.I):
        raise ValueError(f'Complex numbers not supported: "{expr} = {fn}"')

    return fn


def callf(func, vardict=None):
    ''' Call the function using variables defined in vardict dictionary. String will
        be validated before eval.

        Args:
            func: string expression, python callable, or sympy expression to evaluate
            vardict: (dict): dictionary of arguments {name:value} to func

        Returns:
            y: output of function
    '''
    if vardict is None:
        vardict = {}

    if isinstance(func, str):
        # String expression. Convert to sympy.
        func = _parse_math(func)

    if isinstance(func, sympy.Basic):
        # Sympy expression. Lambdify with scipy/numpy so arrays are computed element-wise
        # (scipy provides the array-aware factorial and gamma).
        if func.has(sympy.zoo):
            # lambdify can't print complex infinity, e.g. user entered "1/0"
            vardict['zoo'] = np.inf

        try:
            fn = sympy.lambdify(tuple(vardict.keys()), func, ['scipy', 'numpy'])
            y = fn(**vardict)
        except (ZeroDivisionError, OverflowError):
            y = np.inf

    elif callable(func):
        # Python function. Just call it.  (NOTE: Put this after sympy. A sympy symbol is also callable!)
        y = func(**vardict)

    else:
        raise TypeError(f'Function {func} is not callable')
    return y
