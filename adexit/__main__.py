from adexit.cli import main


raise SystemExit(main())
