from tabdiff.adapter.datasource.csv_file import *
from tabdiff.adapter.datasource.mock import *
from tabdiff.adapter.datasource.shared import *
from tabdiff.adapter.datasource.strategy import *
