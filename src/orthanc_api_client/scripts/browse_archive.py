#!/usr/bin/env python

import argparse
import json
import os
import sys
from dataclasses import dataclass
from typing import Never, TypeVar

import orthanc_api_client.exitcode as exitcode
from orthanc_api_client.client import OrthancApiClient
from orthanc_api_client.config import ArchiveConfig, get_archive_config
from orthanc_api_client.endpoints.system import try_get_system
from orthanc_api_client.errors import ArchiveError, NotFoundError, UploadError
from orthanc_api_client.logging_config import configure_logging
from orthanc_api_client.models.grouped import GroupedPatientStudy
from orthanc_api_client.models.instance import OrthancInstance
from orthanc_api_client.models.series import OrthancSeries
from orthanc_api_client.models.system import OrthancSystem
from orthanc_api_client.session import ArchiveSession, LoadState
from orthanc_api_client.util.text_table import TableWriter

T = TypeVar('T')

parser = argparse.ArgumentParser(description=(
        'Browse the patients, studies, series and instances of an Orthanc archive, build the '
        'retrieval URLs of its instances, or upload a DICOM file to it. The connection options '
        'default to the ORTHANC_* environment variables.'
    ))

parser.add_argument('--url', help='The Orthanc archive URL')
parser.add_argument('--username', help='The Orthanc HTTP basic username')
parser.add_argument('--password', help='The Orthanc HTTP basic password')
parser.add_argument('--timeout', type=float, help='The timeout of each request in seconds')
parser.add_argument('--max-workers', type=int, help='The maximum number of concurrent requests')
parser.add_argument('--verbose', action='store_true', help='Set the script to be verbose')

commands = parser.add_subparsers(dest='command', required=True)

commands.add_parser('status', help='Check that the archive is available')

studies_parser = commands.add_parser('studies', help='List the studies of the archive grouped by patient')
studies_parser.add_argument('--json', action='store_true', help='Print the groups as JSON')

series_parser = commands.add_parser('series', help='List the series of a study')
series_parser.add_argument('study_id', help='The Orthanc identifier of the study')

instances_parser = commands.add_parser('instances', help='List the instances of a series')
instances_parser.add_argument('series_id', help='The Orthanc identifier of the series')

urls_parser = commands.add_parser('urls', help='Print the file and preview URLs of an instance')
urls_parser.add_argument('instance_id', help='The Orthanc identifier of the instance')

wado_parser = commands.add_parser('wado', help='Print the WADO-URI of an instance')
wado_parser.add_argument('study_uid', help='The StudyInstanceUID')
wado_parser.add_argument('series_uid', help='The SeriesInstanceUID')
wado_parser.add_argument('instance_uid', help='The SOPInstanceUID')

upload_parser = commands.add_parser('upload', help='Upload a DICOM file to the archive')
upload_parser.add_argument('file', help='The DICOM file to upload')


@dataclass
class Args:
    config: ArchiveConfig
    command: str
    verbose: bool
    options: argparse.Namespace


def main(argv: list[str] | None = None) -> None:
    parsed_args = parser.parse_args(argv)

    configure_logging('INFO' if parsed_args.verbose else None)

    try:
        args = Args(get_config(parsed_args), parsed_args.command, parsed_args.verbose, parsed_args)
    except ValueError as error:
        error_exit(f"Invalid archive configuration: {error}", exitcode.INVALID_ARG)

    api = OrthancApiClient.connect(args.config)
    with ArchiveSession(api, args.config.max_workers, check=False) as session:
        try:
            run_command(args, session)
        except NotFoundError as error:
            error_exit(error.message, exitcode.NOT_FOUND)
        except UploadError as error:
            error_exit(error.message, exitcode.UPLOAD_FAILURE)
        except ArchiveError as error:
            error_exit(error.message, exitcode.TRANSPORT_FAILURE)


def get_config(parsed_args: argparse.Namespace) -> ArchiveConfig:
    """
    Get the archive configuration from the environment, overridden by the command line options.
    """

    config = get_archive_config()
    return ArchiveConfig(
        url         = option_or(parsed_args.url, config.url),
        username    = option_or(parsed_args.username, config.username),
        password    = option_or(parsed_args.password, config.password),
        timeout     = option_or(parsed_args.timeout, config.timeout),
        max_workers = option_or(parsed_args.max_workers, config.max_workers),
    )


def option_or(option: T | None, default: T) -> T:
    return option if option is not None else default


def run_command(args: Args, session: ArchiveSession):
    options = args.options
    match args.command:
        case 'status':
            system = try_get_system(session.api)
            if system is None:
                error_exit(f"Orthanc archive at '{session.api.url}' is not available.", exitcode.ARCHIVE_UNAVAILABLE)

            print(write_system(system), end='')
        case 'studies':
            if not session.check_availability():
                error_exit(f"Orthanc archive at '{session.api.url}' is not available.", exitcode.ARCHIVE_UNAVAILABLE)

            future = session.refresh()
            if future is None:
                error_exit(f"Orthanc archive at '{session.api.url}' is not available.", exitcode.ARCHIVE_UNAVAILABLE)

            snapshot = future.result()
            if snapshot.load_state == LoadState.LOAD_FAILED:
                error_exit(snapshot.error or "Failed to load studies.", exitcode.LOAD_FAILURE)

            if options.json:
                print(json.dumps([group.model_dump(by_alias=True) for group in snapshot.groups], indent=2))
            else:
                print(write_groups(snapshot.groups), end='')
        case 'series':
            print(write_series(session.list_series(options.study_id)), end='')
        case 'instances':
            print(write_instances(session.list_instances(options.series_id)), end='')
        case 'urls':
            print(session.get_file_url(options.instance_id))
            print(session.get_preview_url(options.instance_id))
        case 'wado':
            print(session.get_wado_url(options.study_uid, options.series_uid, options.instance_uid))
        case 'upload':
            if not os.path.isfile(options.file):
                error_exit(f"File '{options.file}' does not exist.", exitcode.INVALID_PATH)

            with open(options.file, 'rb') as file:
                data = file.read()

            print(session.upload_binary(data, os.path.basename(options.file)))


def write_system(system: OrthancSystem) -> str:
    table = TableWriter('Name', 'Version', 'API version', 'DICOM AET', 'DICOM port')
    table.append_row(system.name, system.version, system.api_version, system.dicom_aet, system.dicom_port)
    return table.write()


def write_groups(groups: tuple[GroupedPatientStudy, ...]) -> str:
    table = TableWriter('Patient ID', 'Patient name', 'Study ID', 'Date', 'Accession', 'Description')
    for group in groups:
        for study in group.studies:
            table.append_row(
                group.patient_id,
                group.patient_name,
                study.study_id,
                study.study_date,
                study.accession_number,
                study.description,
            )

    return table.write()


def write_series(series: list[OrthancSeries]) -> str:
    table = TableWriter('Series ID', 'Number', 'Modality', 'Instances', 'Description', 'Series UID')
    for item in series:
        table.append_row(
            item.id,
            item.tags.series_number,
            item.tags.modality,
            item.number_of_instances,
            item.tags.description,
            item.tags.series_uid,
        )

    return table.write()


def write_instances(instances: list[OrthancInstance]) -> str:
    table = TableWriter('Instance ID', 'Index', 'Number', 'File size', 'SOP instance UID')
    for instance in instances:
        table.append_row(
            instance.id,
            instance.index_in_series,
            instance.tags.instance_number,
            instance.file_size,
            instance.tags.instance_uid,
        )

    return table.write()


def error_exit(message: str, exit_code: int) -> Never:
    print(f"ERROR: {message}", file=sys.stderr)
    sys.exit(exit_code)


if __name__ == '__main__':
    main()
