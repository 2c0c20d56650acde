"""
Schema registry: one immutable descriptor per supported dataset.
"""
from __future__ import annotations

from emigrant_analytics.data.errors import UnknownDataset
from emigrant_analytics.data.schemas import DatasetDescriptor, Orientation, ViewKind

CK = Orientation.CATEGORY_KEYED
YK = Orientation.YEAR_KEYED

# ---------------------------------------------------------------------------
# Vocabularies
# ---------------------------------------------------------------------------

AGE_GROUPS = (
    "14 - Below", "15 - 19", "20 - 24", "25 - 29", "30 - 34", "35 - 39",
    "40 - 44", "45 - 49", "50 - 54", "55 - 59", "60 - 64", "65 - 69",
    "70 - Above", "Not Reported / No Response",
)

OCCUPATIONS = (
    "Prof'l", "Managerial", "Clerical", "Sales", "Service", "Agriculture",
    "Production", "Armed Forces", "Housewives", "Retirees", "Students",
    "Minors", "Out of School Youth", "No Occupation Reported",
)

EDUCATION_LEVELS = (
    "Not of Schooling Age", "No Formal Education", "Elementary Level", "Elementary Graduate",
    "High School Level", "High School Graduate", "Vocational Level", "Vocational Graduate",
    "College Level", "College Graduate", "Post Graduate Level", "Post Graduate",
    "Non-Formal Education", "Not Reported / No Response",
)

CIVIL_STATUSES = ("Single", "Married", "Widower", "Separated", "Divorced", "Not Reported")

MAJOR_DESTINATIONS = (
    "USA", "CANADA", "JAPAN", "AUSTRALIA", "ITALY", "NEW ZEALAND", "UNITED KINGDOM",
    "GERMANY", "SOUTH KOREA", "SPAIN", "OTHERS",
)

SEXES = ("MALE", "FEMALE")

REGIONS = (
    "Region I - Ilocos Region", "Region II - Cagayan Valley", "Region III - Central Luzon",
    "Region IV A - CALABARZON", "Region IV B - MIMAROPA", "Region V - Bicol Region",
    "Region VI - Western Visayas", "Region VII - Central Visayas", "Region VIII - Eastern Visayas",
    "Region IX - Zamboanga Peninsula", "Region X - Northern Mindanao", "Region XI - Davao Region",
    "Region XII - SOCCSKSARGEN", "Region XIII - Caraga",
    "Autonomous Region in Muslim Mindanao (ARMM)",
    "Cordillera Administrative Region (CAR)", "National Capital Region (NCR)",
)

ALL_COUNTRIES = (
    "AFGHANISTAN", "ALBANIA", "ALGERIA", "ANGOLA", "ARGENTINA", "ARMENIA", "AUSTRALIA", "AUSTRIA",
    "AZERBAIJAN", "BAHAMAS", "BANGLADESH", "BELARUS", "BELGIUM", "BELIZE", "BENIN", "BHUTAN",
    "BOLIVIA", "BOSNIA AND HERZEGOVINA", "BOTSWANA", "BRAZIL", "BRUNEI DARUSSALAM", "BULGARIA",
    "BURKINA", "BURUNDI", "CAMBODIA", "CAMEROON", "CANADA", "CENTRAL AFRICAN REPUBLIC", "CHAD",
    "CHILE", "CHINA (P.R.O.C.)", "COLOMBIA", "COSTA RICA", "COTE D' IVOIRE (IVORY COAST)", "CROATIA",
    "CUBA", "CYPRUS", "CZECH REPUBLIC", "DEMOCRATIC REPUBLIC OF THE CONGO (ZAIRE)", "DENMARK",
    "DJIBOUTI", "DOMINICAN REPUBLIC", "ECUADOR", "EGYPT", "EL SALVADOR", "EQUATORIAL GUINEA",
    "ESTONIA", "ETHIOPIA", "FALKLAND ISLANDS (MALVINAS)", "FIJI", "FINLAND", "FRANCE", "GABON",
    "GAMBIA", "GEORGIA", "GERMANY", "GHANA", "GREECE", "GUATEMALA", "GUINEA", "GUYANA", "HAITI",
    "HONDURAS", "HONG KONG", "HUNGARY", "ICELAND", "INDIA", "INDONESIA", "IRAN", "IRAQ", "IRELAND",
    "ISRAEL", "ITALY", "JAMAICA", "JAPAN", "JORDAN", "KAZAKHSTAN", "KENYA", "KUWAIT", "KYRGYZSTAN",
    "LAOS", "LATVIA", "LEBANON", "LESOTHO", "LIBYA", "LITHUANIA", "LUXEMBOURG", "MACEDONIA",
    "MADAGASCAR", "MALAWI", "MALAYSIA", "MALDIVES", "MALI", "MALTA", "MAURITIUS", "MEXICO",
    "MONGOLIA", "MOROCCO", "MOZAMBIQUE", "MYANMAR", "NEPAL", "NETHERLANDS", "NEW ZEALAND",
    "NICARAGUA", "NIGERIA", "NORTH KOREA", "NORWAY", "OMAN", "PAKISTAN", "PANAMA", "PARAGUAY",
    "PERU", "POLAND", "PORTUGAL", "PUERTO RICO", "QATAR", "ROMANIA", "RUSSIAN FEDERATION / USSR",
    "RWANDA", "SAUDI ARABIA", "SEYCHELLES", "SIERRA LEONE", "SINGAPORE", "SLOVAK REPUBLIC",
    "SLOVENIA", "SOLOMON ISLANDS", "SOUTH AFRICA", "SOUTH KOREA", "SPAIN", "SRI LANKA", "SURINAME",
    "SWAZILAND", "SWEDEN", "SWITZERLAND", "SYRIA", "TAIWAN (ROC)", "TANZANIA", "THAILAND",
    "TRINIDAD AND TOBAGO", "TUNISIA", "TURKEY", "UGANDA", "UKRAINE", "UNITED ARAB EMIRATES",
    "UNITED KINGDOM", "UNITED STATES OF AMERICA", "URUGUAY", "VENEZUELA", "VIETNAM", "YEMEN",
    "ZAMBIA", "ZIMBABWE", "OTHERS",
)

PROVINCES = tuple(sorted((
    # Luzon
    "ABRA", "ALBAY", "APAYAO", "AURORA", "BATAAN", "BATANES", "BATANGAS", "BENGUET", "BULACAN",
    "CAGAYAN", "CAMARINES NORTE", "CAMARINES SUR", "CATANDUANES", "CAVITE", "IFUGAO",
    "ILOCOS NORTE", "ILOCOS SUR", "ISABELA", "KALINGA", "LA UNION", "LAGUNA", "MARINDUQUE",
    "MASBATE", "METRO MANILA", "MOUNTAIN PROVINCE", "NUEVA ECIJA", "NUEVA VIZCAYA",
    "OCCIDENTAL MINDORO", "ORIENTAL MINDORO", "PALAWAN", "PAMPANGA", "PANGASINAN", "QUEZON",
    "QUIRINO", "RIZAL", "ROMBLON", "SORSOGON", "TARLAC", "ZAMBALES",
    # Visayas
    "AKLAN", "ANTIQUE", "BOHOL", "CAPIZ", "CEBU", "EASTERN SAMAR", "GUIMARAS", "ILOILO", "LEYTE",
    "NEGROS OCCIDENTAL", "NEGROS ORIENTAL", "NORTHERN SAMAR", "SAMAR", "SIQUIJOR", "SOUTHERN LEYTE",
    # Mindanao
    "AGUSAN DEL NORTE", "AGUSAN DEL SUR", "BASILAN", "BUKIDNON", "CAMIGUIN", "COMPOSTELA VALLEY",
    "DAVAO DEL NORTE", "DAVAO DEL SUR", "DAVAO OCCIDENTAL", "DAVAO ORIENTAL", "DINAGAT ISLANDS",
    "LANAO DEL NORTE", "LANAO DEL SUR", "MAGUINDANAO", "MISAMIS OCCIDENTAL", "MISAMIS ORIENTAL",
    "NORTH COTABATO", "SARANGANI", "SOUTH COTABATO", "SULTAN KUDARAT", "SULU", "SURIGAO DEL NORTE",
    "SURIGAO DEL SUR", "TAWI-TAWI", "ZAMBOANGA DEL NORTE", "ZAMBOANGA DEL SUR", "ZAMBOANGA SIBUGAY",
)))

# ---------------------------------------------------------------------------
# Descriptors
# ---------------------------------------------------------------------------

_DESCRIPTORS = [
    DatasetDescriptor("age", "Age Group", "Emigrant-1981-2020-Age.csv",
                      CK, "AGE_GROUP", (1981, 2020), ViewKind.DISTRIBUTION, AGE_GROUPS),
    DatasetDescriptor("occupation", "Occupation", "Emigrant-1981-2020-Occu.csv",
                      CK, "Occupation", (1981, 2020), ViewKind.TREND, OCCUPATIONS),
    DatasetDescriptor("education", "Education Level", "Emigrant-1988-2020-Educ.csv",
                      CK, "EDUCATIONAL ATTAINMENT", (1988, 2020), ViewKind.COMPOSITION, EDUCATION_LEVELS),
    DatasetDescriptor("region", "Region of Origin", "Emigrant-1988-2020-PlaceOfOrigin.csv",
                      CK, "REGION", (1988, 2020), ViewKind.COMPARISON, REGIONS),
    DatasetDescriptor("province", "Province", "Emigrant-1988-2020-PlaceOfOrigin-Province.csv",
                      CK, "PROVINCE", (1988, 2020), ViewKind.GEOGRAPHIC, PROVINCES),
    DatasetDescriptor("all_countries", "Country", "Emigrant-1981-2020-AllCountries.csv",
                      CK, "COUNTRY", (1981, 2020), ViewKind.GEOGRAPHIC, ALL_COUNTRIES),
    DatasetDescriptor("civil_status", "Civil Status", "Emigrant-1988-2020-CivilStatus.csv",
                      YK, "YEAR", (1988, 2020), ViewKind.HIERARCHICAL, CIVIL_STATUSES),
    DatasetDescriptor("destination", "Destination Country", "Emigrant-1981-2020-MajorCountry.csv",
                      YK, "YEAR", (1981, 2020), ViewKind.TREND, MAJOR_DESTINATIONS),
    DatasetDescriptor("sex", "Sex", "Emigrant-1981-2020-Sex.csv",
                      YK, "YEAR", (1981, 2020), ViewKind.RELATIONSHIP, SEXES),
    DatasetDescriptor("total", "Total Emigrants", "Emigrant-1981-2020-Total.csv",
                      YK, "YEAR", (1981, 2020), ViewKind.TREND, ("TOTAL",)),
]

DATASETS: dict[str, DatasetDescriptor] = {d.id: d for d in _DESCRIPTORS}

# Classifier family / generic row kind → dataset that receives its tuples
FAMILY_DATASETS = {
    "destination": "all_countries",
    "education": "education",
    "region": "region",
    "occupation": "occupation",
    "sex": "sex",
    "civil_status": "civil_status",
}


def get_descriptor(dataset_id: str) -> DatasetDescriptor:
    """Look up a descriptor by id; raises UnknownDataset."""
    try:
        return DATASETS[dataset_id]
    except KeyError:
        raise UnknownDataset(
            f"Unknown dataset: {dataset_id}",
            expected=sorted(DATASETS),
            found=dataset_id,
        ) from None


def dataset_ids() -> list[str]:
    return list(DATASETS)


def descriptor_for_file(file_name: str) -> DatasetDescriptor | None:
    """Descriptor whose expected upload file name matches (case-insensitive)."""
    lowered = file_name.lower()
    for d in _DESCRIPTORS:
        if d.file_name.lower() == lowered:
            return d
    return None
