"""
Programs come in as JSON documents shaped like:

	{
		"functions": [{"name": "f", "params": ["n"], "body": EXPR}, ...],
		"queries": [{"expr": EXPR, "env": {"n": 3, "m": null}}, ...]
	}

where each EXPR is one of:

	{"const": 3}
	{"var": "n"}
	{"if": [EXPR, EXPR, EXPR]}
	{"basic": "add", "args": [EXPR, ...]}
	{"call": "f", "args": [EXPR, ...]}     -- and likewise "memo" and "fpi"

In an env, null means the undefined value. This is a data format, not a syntax:
nothing here parses text beyond what the json module does.
"""
import json
from pathlib import Path
from typing import NamedTuple, Optional, Any
from . import syntax
from .diagnostics import Report

class Query(NamedTuple):
	expr: syntax.Exp
	env: dict[str, Optional[int]]

class Program(NamedTuple):
	functions: list[syntax.FunDef]
	queries: list[Query]

class Malformed(Exception):
	""" Internal: unwinds the loader once the report knows what went wrong. """

_APPLICATIONS = {
	"basic": syntax.BasicFn,
	"call": syntax.Call,
	"memo": syntax.MemoCall,
	"fpi": syntax.FPICall,
}

class Decoder:
	def __init__(self, report:Report):
		self._report = report

	def _expect(self, ok:bool, where:str, expected:str):
		if not ok:
			self._report.malformed(where, expected)
			raise Malformed(where)

	def _name(self, it:Any, where:str) -> str:
		self._expect(isinstance(it, str), where, "a name")
		return it

	def _int(self, it:Any, where:str) -> int:
		# bool is an int in Python, but true is not a number in JSON.
		self._expect(isinstance(it, int) and not isinstance(it, bool), where, "an integer")
		return it

	def _list(self, it:Any, where:str) -> list:
		self._expect(isinstance(it, list), where, "a list")
		return it

	def expr(self, it:Any, where:str) -> syntax.Exp:
		self._expect(isinstance(it, dict), where, "an expression object")
		if "const" in it:
			return syntax.Const(self._int(it["const"], where+".const"))
		if "var" in it:
			return syntax.Var(self._name(it["var"], where+".var"))
		if "if" in it:
			parts = self._list(it["if"], where+".if")
			self._expect(len(parts) == 3, where+".if", "exactly three parts: condition, then, else")
			return syntax.If(*(self.expr(p, "%s.if[%d]"%(where, i)) for i, p in enumerate(parts)))
		for key, ctor in _APPLICATIONS.items():
			if key in it:
				name = self._name(it[key], where+"."+key)
				args = self._list(it.get("args", []), where+".args")
				return ctor(name, [self.expr(a, "%s.args[%d]"%(where, i)) for i, a in enumerate(args)])
		self._report.unknown_form(where, list(it))
		raise Malformed(where)

	def fun_def(self, it:Any, where:str) -> syntax.FunDef:
		self._expect(isinstance(it, dict), where, "a function definition object")
		name = self._name(it.get("name"), where+".name")
		params = [self._name(p, "%s.params[%d]"%(where, i)) for i, p in enumerate(self._list(it.get("params", []), where+".params"))]
		return syntax.FunDef(name, params, self.expr(it.get("body"), where+".body"))

	def query(self, it:Any, where:str) -> Query:
		self._expect(isinstance(it, dict), where, "a query object")
		env = it.get("env", {})
		self._expect(isinstance(env, dict), where+".env", "an object mapping names to integers or null")
		bindings = {k: (None if v is None else self._int(v, where+".env."+k)) for k, v in env.items()}
		return Query(self.expr(it.get("expr"), where+".expr"), bindings)

	def program(self, doc:Any) -> Program:
		self._expect(isinstance(doc, dict), "(document)", "an object with \"functions\" and maybe \"queries\"")
		functions = [self.fun_def(f, "functions[%d]"%i) for i, f in enumerate(self._list(doc.get("functions", []), "functions"))]
		queries = [self.query(q, "queries[%d]"%i) for i, q in enumerate(self._list(doc.get("queries", []), "queries"))]
		return Program(functions, queries)


def load_text(text:str, path:Path, report:Report) -> Optional[Program]:
	try: doc = json.loads(text)
	except json.JSONDecodeError as ex:
		report.broken_file(path, "%s (line %d, column %d)" % (ex.msg, ex.lineno, ex.colno))
		return None
	try: return Decoder(report).program(doc)
	except Malformed: return None

def load_program(path:Path, report:Report) -> Optional[Program]:
	""" Read a program document, or complain to the report and answer None. """
	try: text = path.read_text(encoding="utf-8")
	except FileNotFoundError:
		report.no_such_file(path)
		return None
	except (OSError, UnicodeDecodeError) as ex:
		report.broken_file(path, str(ex))
		return None
	return load_text(text, path, report)
