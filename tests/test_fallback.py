from textwrap import dedent

import pytest

from codestruct.fallback import (
	NOT_IMPLEMENTED_NOTE,
	extract_with_patterns,
	get_line_number,
	split_parameters,
)


def _run(code, language, file="sample"):
	return extract_with_patterns(dedent(code), language, file)


def test_get_line_number():
	text = "a\nbb\nccc\n"
	assert [get_line_number(text, text.index(s)) for s in ("a", "bb", "ccc")] == [1, 2, 3]
	assert get_line_number(text, 0) == 1
	assert get_line_number(text, len(text)) == 4


def test_split_parameters_respects_nesting():
	assert split_parameters("Map<String, Integer> m, int n") == ["Map<String, Integer> m", "int n"]
	assert split_parameters("a: (Int, Int), b") == ["a: (Int, Int)", "b"]
	assert split_parameters("") == []


def test_records_are_marked_incomplete():
	record = _run("def bar(x, y=1):\n    return x\n", "python", "bar.py")
	assert record.complete is False
	assert record.note == NOT_IMPLEMENTED_NOTE
	assert record.file == "bar.py"
	assert record.variables == []
	assert record.exports == []
	assert record.dependencies.imports == record.imports


def test_unknown_language_yields_empty_listings():
	record = extract_with_patterns("anything at all", "cobol", "x.cbl")
	assert record.functions == [] and record.classes == [] and record.imports == []
	assert record.complete is False


def test_python():
	record = _run(
		"""
		import os, sys as system
		from typing import (List,
			Dict as D)

		class Base:
			pass

		class Child(Base, Mixin):
			async def fetch(self, url: str, *args, timeout=3, **kwargs) -> dict:
				pass

		def bar(x, y=1):
			return x
		""",
		"python",
	)
	fetch, bar = record.functions
	assert fetch.name == "fetch"
	assert fetch.parameters == ["self", "url", "*args", "timeout", "**kwargs"]
	assert fetch.is_async
	assert (bar.name, bar.parameters) == ("bar", ["x", "y"])
	assert bar.start.line == 13

	base, child = record.classes
	assert (base.name, base.superclass) == ("Base", None)
	assert (child.superclass, child.interfaces) == ("Base", ["Mixin"])

	assert [i.source for i in record.imports] == ["os", "sys", "typing"]
	assert [b.local for b in record.imports[1].bindings] == ["system"]
	assert [(b.imported, b.local) for b in record.imports[2].bindings] == [("List", "List"), ("Dict", "D")]
	assert record.imports[2].kind == "from_import"


def test_java():
	record = _run(
		"""
		package com.example;

		import java.util.List;
		import java.util.Map;

		public class UserService extends BaseService implements Runnable, Closeable {
			private final List<String> names;

			public UserService(List<String> names) {
				this.names = names;
			}

			public static Map<String, Integer> count(List<String> items, int limit) {
				if (items.isEmpty()) {
					return null;
				}
				return helper(items);
			}

			@Override
			public void run() {
				for (String n : names) {
					System.out.println(n);
				}
			}
		}
		""",
		"java",
	)
	assert [f.name for f in record.functions] == ["UserService", "count", "run"]
	count = record.functions[1]
	assert count.parameters == ["items", "limit"]
	assert count.is_static
	assert count.declaring_class == "(unknown class)"
	(cls,) = record.classes
	assert (cls.name, cls.superclass, cls.interfaces) == ("UserService", "BaseService", ["Runnable", "Closeable"])
	assert [i.source for i in record.imports] == ["java.util.List", "java.util.Map"]


def test_c_and_cpp():
	record = _run(
		"""
		#include <stdio.h>
		#include "util.h"

		struct point {
			int x;
			int y;
		};

		static int add(int a, int b) {
			return a + b;
		}

		int main(void) {
			printf("%d", add(1, 2));
			return 0;
		}
		""",
		"c",
	)
	assert [(f.name, f.parameters) for f in record.functions] == [("add", ["a", "b"]), ("main", [])]
	assert [(c.name, c.kind) for c in record.classes] == [("point", "struct")]
	assert [(i.source, i.kind) for i in record.imports] == [("stdio.h", "include"), ("util.h", "include")]

	record = _run(
		"""
		#include <vector>

		class Counter : public Base {
		};

		int Counter::next(int step) {
			return step;
		}
		""",
		"cpp",
	)
	(method,) = record.functions
	assert (method.name, method.kind, method.declaring_class) == ("next", "method", "Counter")
	assert record.classes[0].superclass == "Base"


def test_go():
	record = _run(
		"""
		package main

		import (
			"fmt"
			str "strings"
		)

		import "os"

		type Server struct {
			name string
		}

		func (s *Server) Start(port int, host string) error {
			return nil
		}

		func Foo(a int, b string) {}
		""",
		"go",
	)
	start, foo = record.functions
	assert (start.name, start.kind, start.declaring_class) == ("Start", "method", "Server")
	assert start.parameters == ["port", "host"]
	assert (foo.name, foo.parameters, foo.kind) == ("Foo", ["a", "b"], "declaration")
	assert [(c.name, c.kind) for c in record.classes] == [("Server", "struct")]
	assert [c.start.line for c in record.classes] == [11]
	assert [i.source for i in record.imports] == ["fmt", "strings", "os"]
	assert [b.local for b in record.imports[1].bindings] == ["str"]


def test_rust():
	record = _run(
		"""
		use std::collections::HashMap;

		pub struct Config {
			name: String,
		}

		pub trait Greeter: Display {
		}

		impl Config {
			pub async fn load(&self, path: &str, mut retries: u32) -> Result<(), Error> {
				Ok(())
			}
		}

		fn main() {}
		""",
		"rust",
	)
	load, main = record.functions
	assert load.parameters == ["self", "path", "retries"]
	assert load.is_async
	assert main.parameters == []
	assert [(c.name, c.kind, c.superclass) for c in record.classes] == [
		("Config", "struct", None),
		("Greeter", "declaration", "Display"),
	]
	assert [(i.source, i.kind) for i in record.imports] == [("std::collections::HashMap", "use")]


def test_php():
	record = _run(
		r"""
		<?php
		namespace App;

		use App\Models\User;
		use Psr\Log\LoggerInterface as Logger;
		require_once 'config.php';

		class UserController extends Controller implements Auditable {
			public function show($id, int $page = 1) {
			}
		}

		function helper(array $items) {}
		""",
		"php",
	)
	show, helper = record.functions
	assert (show.name, show.kind, show.parameters) == ("show", "method", ["$id", "$page"])
	assert (helper.name, helper.kind, helper.parameters) == ("helper", "declaration", ["$items"])
	(cls,) = record.classes
	assert (cls.superclass, cls.interfaces) == ("Controller", ["Auditable"])
	assert [(i.source, i.kind) for i in record.imports] == [
		("App\\Models\\User", "use"),
		("Psr\\Log\\LoggerInterface", "use"),
		("config.php", "require"),
	]
	assert record.imports[1].bindings[0].local == "Logger"


def test_ruby():
	record = _run(
		"""
		require 'json'
		require_relative "lib/helper"

		class Dog < Animal
		  def self.create(name, age = 1)
		  end

		  def bark
		  end
		end
		""",
		"ruby",
	)
	create, bark = record.functions
	assert (create.name, create.is_static, create.parameters) == ("create", True, ["name", "age"])
	assert (bark.name, bark.parameters) == ("bark", [])
	assert [(c.name, c.superclass) for c in record.classes] == [("Dog", "Animal")]
	assert [(i.source, i.kind) for i in record.imports] == [("json", "require"), ("lib/helper", "require_relative")]


def test_swift():
	record = _run(
		"""
		import Foundation
		import UIKit

		class ViewController: UIViewController, UITableViewDelegate {
			override func viewDidLoad() {
			}

			static func make(with name: String, _ count: Int) async -> ViewController {
				return ViewController()
			}
		}

		struct Point {
		}
		""",
		"swift",
	)
	did_load, make = record.functions
	assert did_load.parameters == []
	assert (make.parameters, make.is_async, make.is_static) == (["name", "count"], True, True)
	view_controller, point = record.classes
	assert (view_controller.superclass, view_controller.interfaces) == ("UIViewController", ["UITableViewDelegate"])
	assert point.kind == "struct"
	assert [i.source for i in record.imports] == ["Foundation", "UIKit"]


def test_kotlin():
	record = _run(
		"""
		package demo

		import kotlinx.coroutines.launch
		import java.util.Date as JDate

		data class User(val name: String, val age: Int = 0) : Entity(), Serializable

		suspend fun load(id: Long, force: Boolean = false): User {
			return User("a")
		}
		""",
		"kotlin",
	)
	(load,) = record.functions
	assert (load.name, load.parameters, load.is_async) == ("load", ["id", "force"], True)
	(user,) = record.classes
	assert (user.name, user.superclass, user.interfaces) == ("User", "Entity", ["Serializable"])
	assert [i.source for i in record.imports] == ["kotlinx.coroutines.launch", "java.util.Date"]
	assert record.imports[1].bindings[0].local == "JDate"


def test_scala():
	record = _run(
		"""
		import scala.collection.mutable
		import akka.actor.{Actor, Props}

		case class Point(x: Int, y: Int) extends Shape with Serializable

		object Main extends App {
		  def distance(a: Point, b: Point): Double = 0.0
		}
		""",
		"scala",
	)
	(distance,) = record.functions
	assert distance.parameters == ["a", "b"]
	assert [(c.name, c.superclass, c.interfaces) for c in record.classes] == [
		("Point", "Shape", ["Serializable"]),
		("Main", "App", []),
	]
	assert [i.source for i in record.imports] == ["scala.collection.mutable", "akka.actor.{Actor, Props}"]


def test_csharp():
	record = _run(
		"""
		using System;
		using IO = System.IO;

		namespace Demo
		{
			public class Repo : BaseRepo, IDisposable
			{
				public async Task<int> SaveAsync(string name, int count)
				{
					return await Task.FromResult(1);
				}

				public void Dispose() => Close();
			}
		}
		""",
		"csharp",
	)
	assert [(f.name, f.parameters) for f in record.functions] == [
		("SaveAsync", ["name", "count"]),
		("Dispose", []),
	]
	assert record.functions[0].is_async
	(repo,) = record.classes
	assert (repo.superclass, repo.interfaces) == ("BaseRepo", ["IDisposable"])
	assert [(i.source, i.kind) for i in record.imports] == [("System", "using"), ("System.IO", "using")]
	assert record.imports[1].bindings[0].local == "IO"


def test_vb():
	record = _run(
		"""
		Imports System.Text
		Imports IO = System.IO

		Public Class Report
			Inherits BaseReport

			Public Function Render(ByVal title As String, Optional count As Integer = 1) As String
				Return title
			End Function

			Private Sub Reset()
			End Sub
		End Class
		""",
		"vb",
	)
	assert [(f.name, f.parameters) for f in record.functions] == [("Render", ["title", "count"]), ("Reset", [])]
	(report,) = record.classes
	assert (report.name, report.superclass) == ("Report", "BaseReport")
	assert [i.source for i in record.imports] == ["System.Text", "System.IO"]


@pytest.mark.parametrize("language", ["python", "java", "c", "go", "rust", "php", "ruby", "swift", "kotlin", "scala", "csharp", "vb"])
def test_empty_source(language):
	record = extract_with_patterns("", language, "empty")
	assert record.functions == [] and record.classes == [] and record.imports == []


def test_python_defaults_with_calls():
	record = _run(
		"""
		def f(x=foo(), y=2):
			pass

		def g():
			pass
		""",
		"python",
	)
	assert [(f.name, f.parameters) for f in record.functions] == [("f", ["x", "y"]), ("g", [])]
