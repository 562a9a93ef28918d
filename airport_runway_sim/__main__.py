import sys

from airport_runway_sim.airport import main


sys.exit(main())
