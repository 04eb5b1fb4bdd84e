# Infrastructure clients
from clients.tax_rate_client import CdtfaTaxRateClient, UpstreamResponse
