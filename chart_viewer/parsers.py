"""
Format parsers for uploaded files.

Each parser takes the raw bytes of one file and returns the parsed Python
value: usually a list of records, sometimes a single mapping. Shaping that
value into rows is left to ``normalize``.
"""

import io
import json
import logging
import os
import xml.etree.ElementTree as ET
from functools import partial

import pandas as pd
import yaml

from .config import SUPPORTED_EXTENSIONS
from .errors import ParseFailure, UnsupportedFormat

logger = logging.getLogger(__name__)


def decode_text(content) -> str:
    """Decode uploaded bytes as UTF-8, tolerating a BOM"""
    if isinstance(content, str):
        return content
    return content.decode("utf-8-sig")


# ── Parsers ───────────────────────────────────────────────────────────────
def parse_delimited(content, delimiter=","):
    """Parse delimited text with a header row; every cell is read as text"""
    df = pd.read_csv(
        io.StringIO(decode_text(content)),
        delimiter=delimiter,
        dtype=str,
        keep_default_na=False,
        skip_blank_lines=True,
    )
    return df.to_dict("records")


def parse_json(content):
    return json.loads(decode_text(content))


def parse_yaml(content):
    return yaml.safe_load(decode_text(content))


def parse_xml(content):
    """Parse the first repeating child collection under the root element.

    ``<rows><row a="1"><b>2</b></row>…</rows>`` gives one record per
    ``<row>``: attributes first, then the text of each child element (first
    occurrence per tag). Root children with another tag are ignored.
    """
    root = ET.fromstring(decode_text(content))
    children = list(root)
    if not children:
        return []

    item_tag = children[0].tag
    records = []
    for item in root.findall(item_tag):
        record = dict(item.attrib)
        fields = list(item)
        if not fields and not record:
            record[item.tag] = (item.text or "").strip()
        for child in fields:
            if child.tag not in record:
                record[child.tag] = "".join(child.itertext()).strip()
        records.append(record)
    return records


def parse_spreadsheet(content):
    """Read the first sheet of an .xls/.xlsx workbook"""
    df = pd.read_excel(io.BytesIO(content), sheet_name=0)
    df.columns = [str(col) for col in df.columns]
    return df.to_dict("records")


def parse_pasted(text):
    """Parse pasted data, sniffing the delimiter"""
    delim = next((d for d in ("\t", ";", "|", ",") if d in text), ",")
    return parse_delimited(text, delimiter=delim)


PARSERS = {
    "csv": partial(parse_delimited, delimiter=","),
    "txt": partial(parse_delimited, delimiter=","),
    "tsv": partial(parse_delimited, delimiter="\t"),
    "json": parse_json,
    "yaml": parse_yaml,
    "yml": parse_yaml,
    "xml": parse_xml,
    "xls": parse_spreadsheet,
    "xlsx": parse_spreadsheet,
}


def file_extension(filename) -> str:
    return os.path.splitext(filename or "")[1].lstrip(".").lower()


def parser_for(filename):
    """Return ``(extension, parser)`` for a file name"""
    ext = file_extension(filename)
    if ext not in SUPPORTED_EXTENSIONS:
        raise UnsupportedFormat(ext)
    return ext, PARSERS[ext]


def parse_file(filename, content):
    """Parse an uploaded file into ``(extension, parsed value)``.

    Raises ``UnsupportedFormat`` for unknown extensions and wraps every
    parser error in ``ParseFailure``.
    """
    ext, parser = parser_for(filename)
    logger.debug("Parsing %s as %s", filename, ext)
    try:
        return ext, parser(content)
    except Exception as e:
        raise ParseFailure(f"Could not parse {filename}: {e}") from e
