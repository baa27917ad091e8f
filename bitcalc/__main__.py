from bitcalc.calculator.cli import main

raise SystemExit(main())
