"""
GS1 identifier constants.

URN markers, Digital Link AI path prefixes, qualifier prefixes and query
parameter keys shared by the validators and converters.
"""

GS1_IDENTIFIER_DOMAIN = "https://id.gs1.org"
GS1_VOC_DOMAIN = "https://gs1.org/voc/"
GS1_VOC_PREFIX = "gs1:"

EPC_ID_URN = "urn:epc:id:"
EPC_CLASS_URN = "urn:epc:class:"
EPC_IDPAT_URN = "urn:epc:idpat:"
CLASS_URN_PREFIX = ":idpat:"

# URN family markers
SGTIN_URN = ":sgtin:"
SGLN_URN = ":sgln:"
SSCC_URN = ":sscc:"
GIAI_URN = ":giai:"
GINC_URN = ":ginc:"
GRAI_URN = ":grai:"
GSIN_URN = ":gsin:"
GSRN_URN = ":gsrn:"
GSRNP_URN = ":gsrnp:"
GDTI_URN = ":gdti:"
GCN_URN = ":sgcn:"
CPI_URN = ":cpi:"
ITIP_URN = ":itip:"
LGTIN_URN = ":lgtin:"
UPUI_URN = ":upui:"
PGLN_URN = ":pgln:"

# Digital Link primary key prefixes
GTIN_URI = "/01/"
SSCC_URI = "/00/"
GLN_URI = "/414/"
PGLN_URI = "/417/"
GIAI_URI = "/8004/"
GINC_URI = "/401/"
GRAI_URI = "/8003/"
GSIN_URI = "/402/"
GSRN_URI = "/8018/"
GSRNP_URI = "/8017/"
GDTI_URI = "/253/"
GCN_URI = "/255/"
CPI_URI = "/8010/"
ITIP_URI = "/8006/"

# Digital Link qualifiers
LOT_URI = "/10/"
SERIAL_URI = "/21/"
CPV_URI = "/22/"
TPX_URI = "/235/"
GLN_EXTENSION_URI = "/254/"
CPI_SERIAL_URI = "/8011/"

# Digital Link query parameters
EXPIRY_DATE_PARAM = "17="
NET_WEIGHT_PARAM = "3103="
AMOUNT_PARAM = "3922="

# Prefixes whose payload embeds the GCP directly (no indicator digit)
GCP_DIRECT_PREFIXES = (
    "/8010/",
    "/255/",
    "/253/",
    "/8004/",
    "/401/",
    "/402/",
    "/8018/",
    "/8017/",
    "/417/",
    "/414/",
)

# Keys of the DL -> URN conversion record
AS_URN = "asURN"
AS_CAPTURED = "asCaptured"
CANONICAL_DL = "canonicalDL"
SERIAL = "serial"

GEPIR_HINT = "Visit GEPIR (https://gepir.gs1.org/) or contact your GS1 MO."
