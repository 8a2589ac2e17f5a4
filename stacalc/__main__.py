#!/usr/bin/env python
''' STACALC - Probability Distribution Calculator
    Command line interface.

    Two commands are installed:
        stacalc: Analyze a user-defined PDF or PMF over a domain
        stacalcdist: Calculate properties of a standard distribution
'''
import os
import sys
import logging
import argparse

from stacalc.common.config import AnalyzerSettings
from stacalc.analyzer import DistAnalyzer
from stacalc.standard import get_model


def _output_format(args):
    ''' Output format from -f, or from the -o file extension '''
    fmt = args.f
    if args.o and hasattr(args.o, 'name') and args.o.name != '<stdout>':
        _, fmt = os.path.splitext(str(args.o.name))
        fmt = fmt[1:]  # remove '.'
    return fmt


def _write_report(r, args, **kwargs):
    ''' Render the report in the requested format and write it '''
    fmt = _output_format(args)
    if fmt == 'html':
        strreport = r.get_html(mathfmt='latex', figfmt='svg', **kwargs)
    elif fmt == 'md':
        strreport = r.get_md(mathfmt='latex', figfmt='svg', **kwargs)
    else:
        strreport = r.get_md(mathfmt='text', figfmt='text', **kwargs)
    args.o.write(strreport)
    args.o.write('\n')
    if args.o is not sys.stdout:
        args.o.close()


def _set_logging(verbose):
    if verbose > 1:
        logging.basicConfig(level=logging.INFO)


def main_analyze(args=None):
    ''' Analyze a PDF or PMF typed on the command line '''
    parser = argparse.ArgumentParser(prog='stacalc', description='Validate and analyze a probability distribution function.')
    parser.add_argument('function', help='PDF or PMF as a function of x (e.g. "2e^(-2x)")', type=str)
    parser.add_argument('domain', help='Domain of x (e.g. "0 < x < infinity" or "0,1,2,3")', type=str)
    parser.add_argument('--moment', nargs='+', type=int, default=None,
                        help='Additional moment orders r to calculate E[X^r]')
    parser.add_argument('--prob', nargs='+', type=float, default=None,
                        help='Values k to calculate P(X=k), P(X<=k) and P(X>k)')
    parser.add_argument('--config', help='Analyzer settings file (yaml)', type=str, default=None)
    parser.add_argument('-o', help='Output filename. Extension determines file format.',
                        type=argparse.FileType('w', encoding='UTF-8'), default=sys.stdout)
    parser.add_argument('-f', help="Output format for when output filename not provided ['txt', 'html', 'md']",
                        type=str, choices=['html', 'txt', 'md'])
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Verbose mode. Include plot with one v, also log calculation details with two.')
    args = parser.parse_args(args=args)
    _set_logging(args.verbose)

    settings = AnalyzerSettings()
    if args.config:
        settings = AnalyzerSettings.from_configfile(args.config)

    analyzer = DistAnalyzer(args.function, args.domain, settings=settings)
    result = analyzer.calculate(moments_r=args.moment, probs=args.prob)

    if args.verbose > 0:
        r = result.report.all()
    else:
        r = result.report.summary()
    _write_report(r, args, n=settings.sigfigs)


def main_standard(args=None):
    ''' Calculate properties of a standard distribution '''
    parser = argparse.ArgumentParser(prog='stacalcdist', description='Calculate properties of a standard distribution.')
    parser.add_argument('name', help='Distribution name: binomial, poisson, geometric, normal, exponential, gamma',
                        type=str)
    parser.add_argument('params', nargs='*', help='Distribution parameters (e.g. "n=10" "p=0.5")', type=str)
    parser.add_argument('--x', nargs='+', type=float, default=None,
                        help='Values x to calculate the pdf/pmf, P(X<=x) and P(X>x)')
    parser.add_argument('--q', nargs='+', type=float, default=None,
                        help='Probabilities q to calculate quantiles')
    parser.add_argument('-o', help='Output filename. Extension determines file format.',
                        type=argparse.FileType('w', encoding='UTF-8'), default=sys.stdout)
    parser.add_argument('-f', help="Output format for when output filename not provided ['txt', 'html', 'md']",
                        type=str, choices=['html', 'txt', 'md'])
    parser.add_argument('--verbose', '-v', action='count', default=0,
                        help='Verbose mode. Include plot with one v.')
    args = parser.parse_args(args=args)
    _set_logging(args.verbose)

    params = {}
    for param in args.params:
        if '=' not in param:
            parser.error(f'Parameter "{param}" must be NAME=VALUE')
        name, value = param.split('=', 1)
        params[name.strip()] = value.strip()

    try:
        model = get_model(args.name, **params)
    except ValueError as exc:
        parser.error(str(exc))

    if args.verbose > 0:
        r = model.report.all(xvalues=args.x, qvalues=args.q)
    else:
        r = model.report.summary()
        r.append(model.report.probabilities(args.x, args.q))
    _write_report(r, args)


if __name__ == '__main__':
    main_analyze()
