import sys, random
from pathlib import Path
from typing import Any, Sequence

class TooManyIssues(Exception):
	pass

def _outburst():
	particle = ["Oh, ", "Well, ", "Aw, ", "", ""]

	minced_oaths = [
		'Ack', 'ARGH', 'Blargh', 'Blasted Thing',
		'Confound it', 'Crud', 'Curses', "Crikey",
		'Dag Nabbit', 'Drat', 'Fiddlesticks', 'Good Grief', "Great Scott",
		'Jeepers', 'Heavens', 'Nuts', 'Rats', 'Woe is me',
	]

	resignations = [
		'I am undone.',
		'I cannot continue.',
		'I have no idea what the right answer is.',
		'I need to ask for help.',
	]

	return "%s%s! %s"%tuple(map(random.choice, (particle, minced_oaths, resignations)))

class Pic:
	"""
	One complaint: an introduction, the places it concerns, and maybe some further remarks.
	Places are paths into the program document, like "functions[2].body.args[0]".
	"""
	def __init__(self, intro:str, where:Sequence[str]=(), footer:Sequence[str]=()):
		self._intro, self._where, self._footer = intro, list(where), list(footer)
	def as_text(self):
		lines = [self._intro]
		lines.extend("    at " + w for w in self._where)
		lines.extend(self._footer)
		return '\n'.join(lines)
	def __repr__(self): return "<Pic %r>" % self._intro

class Report:
	""" Collects the issues of a run, and chatters about progress when asked to. """
	_issues : list[Pic]
	_cautions : list[Pic]

	def __init__(self, *, verbose:int, max_issues=3):
		self._verbose = verbose or 0   # Because None is incomparable.
		self._issues = []
		self._cautions = []
		self._max_issues = max_issues

	def ok(self): return not self._issues
	def sick(self): return bool(self._issues)
	@property
	def issues(self) -> list[Pic]: return list(self._issues)
	@property
	def cautions(self) -> list[Pic]: return list(self._cautions)

	def issue(self, it:Any):
		self._issues.append(it)
		if len(self._issues) == self._max_issues:
			raise TooManyIssues(self)

	def info(self, *args):
		if self._verbose:
			print(*args, file=sys.stderr)

	def complain_to_console(self):
		""" Emit all the issues to the console. """
		_bemoan(self._issues)

	def caution(self, it:Pic):
		""" Something the user should hear about, though the answers stand. Never counts as an issue. """
		self._cautions.append(it)

	def mention_cautions(self):
		for c in self._cautions:
			print(c.as_text(), file=sys.stderr)

	def assert_no_issues(self, message):
		""" Does what it says on the tin """
		if self._issues:
			self.complain_to_console()
			raise AssertionError(_outburst()+" "+message)

	# Methods the program loader calls:

	def _file_error(self, path:Path, prefix:str, footer=()):
		self.issue(Pic(prefix+" "+str(path), (), footer))

	def no_such_file(self, path:Path):
		self._file_error(path, "I see no file called")

	def broken_file(self, path:Path, reason:str):
		self._file_error(path, "Something went pear-shaped while trying to read", [reason])

	def malformed(self, where:str, expected:str):
		self.issue(Pic("Expected %s here." % expected, [where]))

	def unknown_form(self, where:str, keys:Sequence[str]):
		intro = "This is not any kind of expression I know."
		footer = ["(Keys were: %s)" % ", ".join(map(repr, keys)), "Try one of: const, var, if, basic, call, memo, fpi"]
		self.issue(Pic(intro, [where], footer))

	# Methods the demand analysis calls:

	def mutual_recursion(self, names:Sequence[str]):
		intro = "These functions call each other in a cycle. Memo tables are keyed only by argument, so I cannot tell their recursive calls apart."
		footer = [" - The cycle is: " + ", ".join(sorted(names)), " - Treating them as strict in nothing."]
		self.caution(Pic(intro, [], footer))

	# Methods the command line calls:

	def undefined_operation(self, where:str, reason:str):
		self.issue(Pic("This cannot be evaluated.", [where], [reason]))


def _bemoan(issues):
	""" Emit all the issues to the console. """
	if issues:
		print("*"*60, file=sys.stderr)
		print(_outburst(), file=sys.stderr)
	for i in issues:
		print("  -"*20, file=sys.stderr)
		print(i.as_text(), file=sys.stderr)
	sys.stderr.flush()
