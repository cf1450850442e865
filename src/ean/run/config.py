import configparser
import os
from ean.run.comparison import comparison_functions

class Config:

    @staticmethod
    def _parse_comparison(raw_value):
        """
        Validate the name of the comparison function.

        Parameters:
            raw_value: One of the names in 'comparison_functions' ("direct", "inverse")

        Returns:
            The validated name
        """
        if raw_value not in comparison_functions:
            raise ValueError(f"Invalid comparison function '{raw_value}', "
                             f"expected one of {sorted(comparison_functions)}")
        return raw_value

    @staticmethod
    def _parse_rate(name, raw_value):
        if raw_value is not None and not 0.0 <= raw_value <= 1.0:
            raise ValueError(f"'{name}' must be in [0, 1], got {raw_value}")
        return raw_value

    def __init__(self, config_file: str | None = None):
        """
        Initialize Config by parsing an INI file, or create a default Config.

        Parameters:
            config_file: Path to the INI configuration file.
                         If None, creates a Config with default values for manual
                         attribute setting ('num_inputs' and 'num_outputs' stay None).
        """

        # Default config for testing/manual setup
        if config_file is None:
            self.seed = None

            self.population_size = 50
            self.num_inputs      = None
            self.num_outputs     = None
            self.num_init_hidden = 2

            self.num_tournaments = 500
            self.crossover_rate  = 0.5
            self.comparison      = 'inverse'

            self.add_node_rate = 0.5
            self.add_edge_rate = 0.5

            self.num_epochs    = 100
            self.batch_size    = 4
            self.learning_rate = 0.1

            return

        if not os.path.exists(config_file):
            raise FileNotFoundError(f"Configuration file '{config_file}' not found")

        parser = configparser.ConfigParser()
        parser.read(config_file)

        # Sentinel for missing default values
        _NO_DEFAULT = object()

        # Helper function to safely parse values
        def get_value(section, key, value_type, default=_NO_DEFAULT):
            try:
                raw_value = parser.get(section, key)
                if raw_value.lower() == 'none':
                    return None
                if value_type == int:
                    return parser.getint(section, key)
                elif value_type == float:
                    return parser.getfloat(section, key)
                elif value_type == str:
                    return raw_value
            except (configparser.NoSectionError, configparser.NoOptionError):
                if default is not _NO_DEFAULT:
                    return default
                raise

        # [RUN]

        # Seed of the random number generator driving the whole run.
        # Use "None" for a different (non-reproducible) run every time.
        self.seed = get_value('RUN', 'seed', int, default=None)

        # [POPULATION_INIT]

        # The number of genomes in the population.
        self.population_size = get_value('POPULATION_INIT', 'population_size', int, default=50)

        # The number of input nodes, through which the network receives inputs.
        self.num_inputs = get_value('POPULATION_INIT', 'num_inputs', int)

        # The number of output nodes, to which the network delivers outputs.
        self.num_outputs = get_value('POPULATION_INIT', 'num_outputs', int)

        # The number of hidden nodes of a newly created genome. Each of them
        # is connected from all input nodes and to all output nodes.
        self.num_init_hidden = get_value('POPULATION_INIT', 'num_init_hidden', int, default=2)

        # [TOURNAMENT]

        # The number of tournaments after which to stop the run.
        self.num_tournaments = get_value('TOURNAMENT', 'num_tournaments', int, default=500)

        # The probability that the loser of a tournament is crossed over with the winner.
        self.crossover_rate = get_value('TOURNAMENT', 'crossover_rate', float, default=0.5)

        # How two scores are compared.
        # Allowed values:
        #   "direct"  - the higher score wins (e.g. fitness)
        #   "inverse" - the lower score wins (e.g. error)
        self.comparison = get_value('TOURNAMENT', 'comparison', str, default='inverse')

        # [STRUCTURAL_MUTATIONS]

        # The probability that mutation will split an enabled edge with a new node.
        self.add_node_rate = get_value('STRUCTURAL_MUTATIONS', 'add_node_rate', float, default=0.5)

        # The probability that mutation will add an edge between two existing nodes.
        self.add_edge_rate = get_value('STRUCTURAL_MUTATIONS', 'add_edge_rate', float, default=0.5)

        # [TRAINING]

        # The number of backpropagation steps performed on each evaluated genome.
        self.num_epochs = get_value('TRAINING', 'num_epochs', int, default=100)

        # The number of rows in each training batch.
        self.batch_size = get_value('TRAINING', 'batch_size', int, default=4)

        # Step size of the weight update.
        self.learning_rate = get_value('TRAINING', 'learning_rate', float, default=0.1)

    def __setattr__(self, name, value):
        """
        Override 'setattr' to validate the comparison name and the rates
        whether they come from a file or are set manually.
        """
        if name == 'comparison':
            value = self._parse_comparison(value)
        elif name in ('crossover_rate', 'add_node_rate', 'add_edge_rate'):
            value = self._parse_rate(name, value)
        super().__setattr__(name, value)
