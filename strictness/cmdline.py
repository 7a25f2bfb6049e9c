"""
This is a strictness analyzer for a tiny first-order functional language.

{0}

For example:

    strictness program.json

will print which parameters each function in program.json is strict in,
and then evaluate each query in the program both concretely and abstractly.

    strictness -h

will explain all the arguments.
"""
import sys, argparse
from pathlib import Path

parser = argparse.ArgumentParser(
	prog="strictness",
	description="Strictness analysis by abstract interpretation.",
)
parser.add_argument("program", help="a JSON program document; see strictness.front_end for the format.")
parser.add_argument('-v', "--verbose", action="count", help="Chatter about progress on stderr.")
parser.add_argument('-q', "--quiet", action="store_true", help="Only print the strictness of each function; skip the queries.")

def _show(value) -> str:
	return "undefined" if value is None else str(value)

def run(args):
	from .diagnostics import Report, TooManyIssues
	from .front_end import load_program
	from .demand import DemandAnalysis, render_signature
	report = Report(verbose=args.verbose)
	try:
		program = load_program(Path.cwd() / args.program, report)
		if program is None:
			report.complain_to_console()
			return 1
		analysis = DemandAnalysis(program.functions, report)
		report.mention_cautions()
		for name, udf in analysis.udfs.items():
			print(render_signature(udf, analysis.stricture(name)))
		if not args.quiet:
			_run_queries(program, analysis, report)
	except TooManyIssues:
		report.complain_to_console()
		print(" *"*35, file=sys.stderr)
		print("Giving up after a few issues. One crisis at a time, eh?", file=sys.stderr)
		return 1
	if report.sick():
		report.complain_to_console()
		return 1
	return 0

def _run_queries(program, analysis, report):
	from .concrete import evaluate_program, evaluate
	from .domain import alpha_env
	from .primitive import ArityError
	phi = evaluate_program(program.functions)
	for i, query in enumerate(program.queries):
		report.info("Query:", query.expr)
		try: concrete = _show(evaluate(query.expr, phi, query.env))
		except RecursionError: concrete = "undefined (still recursing at the interpreter's depth limit)"
		except ArityError as ex:
			report.undefined_operation("queries[%d].expr" % i, str(ex))
			continue
		print("%r => %s / %r" % (query.expr, concrete, analysis.query(query.expr, alpha_env(query.env))))

def main():
	if len(sys.argv) > 1:
		exit(run(parser.parse_args()))
	else:
		print(__doc__.strip().format(parser.format_usage()))
