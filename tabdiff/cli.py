import argparse
import json
import pathlib
import sys
import typing

import pydantic
from loguru import logger

from tabdiff import adapter, data, service

__all__ = ("main",)


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class DiffArgs:
    left: str
    right: str
    schema_file: pathlib.Path | None
    table: str | None
    as_json: bool


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class SchemaDiffArgs:
    left: str
    right: str
    table: str | None


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class DumpArgs:
    source: str
    schema_file: pathlib.Path | None
    table: str | None
    output: pathlib.Path | None


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class GenerateSchemaArgs:
    source: str
    table: str | None
    output: pathlib.Path | None


@pydantic.dataclasses.dataclass(frozen=True, kw_only=True)
class GenerateConfigArgs:
    ds_type: data.DatasourceType


_CONFIG_TEMPLATES: typing.Final[dict[data.DatasourceType, dict[str, typing.Any]]] = {
    data.DatasourceType.CSV: {"name": "", "type": "csv", "path": ""},
    data.DatasourceType.MOCK: {"name": "", "type": "mock", "row-count": 100},
    data.DatasourceType.ODBC: {"name": "", "type": "odbc", "connection-string": "", "table": None},
    data.DatasourceType.POSTGRES: {
        "name": "",
        "type": "postgres",
        "host": "localhost",
        "db-name": "",
        "keyring-username-entry": "",
        "keyring-password-entry": "",
        "connection-string": None,
        "table": None,
    },
}


def _resolve_datasource(name: str, /, *, config: data.Config) -> data.DatasourceConfig | data.Error:
    if ds_config := config.datasource(name):
        return ds_config

    if name.lower().endswith(".csv"):
        return data.DatasourceConfig(name=name, type=data.DatasourceType.CSV, path=pathlib.Path(name))

    if name == data.DatasourceType.MOCK.value:
        return data.DatasourceConfig(name=name, type=data.DatasourceType.MOCK)

    return data.Error.new(
        f"{name} is neither a datasource entry in the config file nor a path to a csv file.",
        name=name,
    )


def _load_schema_file(path: pathlib.Path | None, /) -> data.Schema | None | data.Error:
    if path is None:
        return None

    return adapter.schema_file.load(path=path)


def _diff(*, diff_args: DiffArgs, config: data.Config) -> None | data.Error:
    left = _resolve_datasource(diff_args.left, config=config)
    if isinstance(left, data.Error):
        return left

    right = _resolve_datasource(diff_args.right, config=config)
    if isinstance(right, data.Error):
        return right

    schema = _load_schema_file(diff_args.schema_file)
    if isinstance(schema, data.Error):
        return schema

    result = service.diff(
        left=left,
        right=right,
        schema=schema,
        table=diff_args.table,
        max_workers=config.max_workers,
    )
    if isinstance(result, data.Error):
        return result

    if diff_args.as_json:
        print(adapter.report.render_json(result.to_record()))
    else:
        print(adapter.report.render_diff(diff=result))

    return None


def _schema_diff(*, schema_diff_args: SchemaDiffArgs, config: data.Config) -> None | data.Error:
    sides: list[data.DatasourceConfig | data.Schema] = []
    for name in (schema_diff_args.left, schema_diff_args.right):
        if name.lower().endswith(".json"):
            side: data.DatasourceConfig | data.Schema | data.Error = adapter.schema_file.load(path=pathlib.Path(name))
        else:
            side = _resolve_datasource(name, config=config)

        if isinstance(side, data.Error):
            return side

        sides.append(side)

    delta = service.schema_diff(left=sides[0], right=sides[1], table=schema_diff_args.table)
    if isinstance(delta, data.Error):
        return delta

    print(adapter.report.render_schema_delta(delta=delta))

    return None


def _dump(*, dump_args: DumpArgs, config: data.Config) -> None | data.Error:
    source = _resolve_datasource(dump_args.source, config=config)
    if isinstance(source, data.Error):
        return source

    schema = _load_schema_file(dump_args.schema_file)
    if isinstance(schema, data.Error):
        return schema

    result = service.dump(config=source, schema=schema, table=dump_args.table, output=dump_args.output)
    if isinstance(result, data.Error):
        return result

    if dump_args.output is None:
        source_schema, rows = result
        print(adapter.report.render_rows(column_names=source_schema.column_names, rows=rows))

    return None


def _generate_schema(*, generate_schema_args: GenerateSchemaArgs, config: data.Config) -> None | data.Error:
    source = _resolve_datasource(generate_schema_args.source, config=config)
    if isinstance(source, data.Error):
        return source

    schema = service.generate_schema(
        config=source,
        table=generate_schema_args.table,
        output=generate_schema_args.output,
    )
    if isinstance(schema, data.Error):
        return schema

    if generate_schema_args.output is None:
        print(adapter.report.render_json(adapter.schema_file.to_dict(schema)))

    return None


def _generate_config(*, generate_config_args: GenerateConfigArgs) -> None:
    print(json.dumps(_CONFIG_TEMPLATES[generate_config_args.ds_type], indent=2))


def _parse_diff_args(args: argparse.Namespace, /) -> DiffArgs | data.Error:
    try:
        return DiffArgs(
            left=args.left,
            right=args.right,
            schema_file=pathlib.Path(args.schema) if args.schema else None,
            table=args.table,
            as_json=args.json,
        )
    except Exception as diff_error:
        return data.Error.new(str(diff_error), diff_args=args)


def _parse_schema_diff_args(args: argparse.Namespace, /) -> SchemaDiffArgs | data.Error:
    try:
        return SchemaDiffArgs(left=args.left, right=args.right, table=args.table)
    except Exception as schema_diff_error:
        return data.Error.new(str(schema_diff_error), schema_diff_args=args)


def _parse_dump_args(args: argparse.Namespace, /) -> DumpArgs | data.Error:
    try:
        return DumpArgs(
            source=args.source,
            schema_file=pathlib.Path(args.schema) if args.schema else None,
            table=args.table,
            output=pathlib.Path(args.output) if args.output else None,
        )
    except Exception as dump_error:
        return data.Error.new(str(dump_error), dump_args=args)


def _parse_generate_schema_args(args: argparse.Namespace, /) -> GenerateSchemaArgs | data.Error:
    try:
        return GenerateSchemaArgs(
            source=args.source,
            table=args.table,
            output=pathlib.Path(args.output) if args.output else None,
        )
    except Exception as generate_schema_error:
        return data.Error.new(str(generate_schema_error), generate_schema_args=args)


def _parse_generate_config_args(args: argparse.Namespace, /) -> GenerateConfigArgs | data.Error:
    try:
        return GenerateConfigArgs(ds_type=data.DatasourceType(args.type))
    except ValueError:
        return data.Error.new(f"{args.type!r} is not a datasource type.", generate_config_args=args)


def _load_config(config_file: str | None, /) -> data.Config | data.Error:
    if config_file:
        return adapter.config.load(config_file=pathlib.Path(config_file))

    default_config_path = adapter.fs.get_default_config_path()
    if default_config_path.exists():
        return adapter.config.load(config_file=default_config_path)

    return data.Config(max_workers=adapter.config.DEFAULT_MAX_WORKERS, datasources=())


def _run(args: argparse.Namespace, /) -> None | data.Error:
    if args.command == "generate-config":
        generate_config_args = _parse_generate_config_args(args)
        if isinstance(generate_config_args, data.Error):
            return generate_config_args

        _generate_config(generate_config_args=generate_config_args)
        return None

    config = _load_config(args.config)
    if isinstance(config, data.Error):
        return config

    match cmd := args.command:
        case "diff":
            diff_args = _parse_diff_args(args)
            if isinstance(diff_args, data.Error):
                return diff_args

            return _diff(diff_args=diff_args, config=config)
        case "schema-diff":
            schema_diff_args = _parse_schema_diff_args(args)
            if isinstance(schema_diff_args, data.Error):
                return schema_diff_args

            return _schema_diff(schema_diff_args=schema_diff_args, config=config)
        case "dump":
            dump_args = _parse_dump_args(args)
            if isinstance(dump_args, data.Error):
                return dump_args

            return _dump(dump_args=dump_args, config=config)
        case "generate-schema":
            generate_schema_args = _parse_generate_schema_args(args)
            if isinstance(generate_schema_args, data.Error):
                return generate_schema_args

            return _generate_schema(generate_schema_args=generate_schema_args, config=config)
        case _:
            return data.Error.new(f"Unrecognized command, {cmd!r}.", args=args)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tabdiff", description="Compare the rows and schemas of two tables.")
    parser.add_argument("--config", type=str, help="path to the config file (default: ./tabdiff.json)")
    parser.add_argument("--verbose", action="store_true")

    subparser = parser.add_subparsers(dest="command", required=True)

    diff_parser = subparser.add_parser("diff", help="compare the rows of two datasources")
    schema_diff_parser = subparser.add_parser("schema-diff", help="compare the schemas of two datasources")
    dump_parser = subparser.add_parser("dump", help="print the rows of a datasource")
    generate_schema_parser = subparser.add_parser("generate-schema", help="write a datasource's schema as json")
    generate_config_parser = subparser.add_parser("generate-config", help="print a config file entry template")

    diff_parser.add_argument("left", type=str)
    diff_parser.add_argument("right", type=str)
    diff_parser.add_argument("--schema", type=str)
    diff_parser.add_argument("--table", type=str)
    diff_parser.add_argument("--json", action="store_true")

    schema_diff_parser.add_argument("left", type=str)
    schema_diff_parser.add_argument("right", type=str)
    schema_diff_parser.add_argument("--table", type=str)

    dump_parser.add_argument("source", type=str)
    dump_parser.add_argument("--schema", type=str)
    dump_parser.add_argument("--table", type=str)
    dump_parser.add_argument("--output", type=str)

    generate_schema_parser.add_argument("source", type=str)
    generate_schema_parser.add_argument("--table", type=str)
    generate_schema_parser.add_argument("--output", type=str)

    generate_config_parser.add_argument(
        "--type",
        type=str,
        required=True,
        choices=[ds_type.value for ds_type in data.DatasourceType],
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    args = _build_parser().parse_args(sys.argv[1:] if argv is None else argv)

    try:
        logger.remove()
        logger.add(sys.stderr, level="DEBUG" if args.verbose else "INFO")

        log_folder = adapter.fs.get_log_folder()
        if isinstance(log_folder, data.Error):
            logger.error(f"An error occurred while looking up log folder: {log_folder!s}")
            sys.exit(1)

        logger.add(log_folder / "error.log", rotation="5 MB", retention="7 days", level="ERROR")

        result = _run(args)
        if isinstance(result, data.Error):
            logger.error(str(result))
            sys.exit(1)

        logger.debug("Done.")
    except Exception as e:
        logger.exception(e)
        sys.exit(1)


if __name__ == "__main__":
    main()
