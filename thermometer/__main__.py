"""Temperature polling service entrypoint.

Usage: python -m thermometer
"""

from thermometer.polling import main

if __name__ == "__main__":
    main()
