from .step_10_preflight import PreflightStep
from .step_20_install_dependencies import InstallDependenciesStep
from .step_30_prepare_workdir import PrepareWorkdirStep
from .step_40_fetch_release import FetchReleaseStep
from .step_50_extract_verify import ExtractVerifyStep
from .step_55_dns_instructions import DnsInstructionsStep
from .step_60_check_dns import CheckDnsStep
from .step_70_request_certificate import RequestCertificateStep
from .step_75_write_app_config import WriteAppConfigStep
from .step_90_summary import SummaryStep
from .step_95_configure_binary import ConfigureBinaryStep

__all__ = [
    "PreflightStep",
    "InstallDependenciesStep",
    "PrepareWorkdirStep",
    "FetchReleaseStep",
    "ExtractVerifyStep",
    "DnsInstructionsStep",
    "CheckDnsStep",
    "RequestCertificateStep",
    "WriteAppConfigStep",
    "SummaryStep",
    "ConfigureBinaryStep",
]
